"""Unit tests for the 2NF, 3NF and BCNF checks."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from RELNORM.fd.normal_forms import (
    NormalForm,
    check_2nf,
    check_3nf,
    check_bcnf,
    determine_normal_form,
    is_in_2nf,
    is_in_3nf,
    is_in_bcnf,
    scan_order,
)
from RELNORM.ir.models import AttributeSet, FDSet, FunctionalDependency, Schema
from RELNORM.utils.error_handling import UnknownAttribute


class TestBCNF:
    """Test BCNF detection and violation ordering."""

    def test_key_determinants_are_bcnf(self, abc_schema):
        assert is_in_bcnf(abc_schema, FDSet(["A -> B", "A -> C"]))

    def test_no_dependencies_is_bcnf(self, abc_schema):
        assert is_in_bcnf(abc_schema, FDSet())

    def test_transitive_dependency_violates(self, abc_schema, transitive_fds):
        report = check_bcnf(abc_schema, transitive_fds)
        assert not report.is_satisfied
        assert report.violations == [FunctionalDependency("B", "C")]
        assert report.normal_form is NormalForm.BCNF

    def test_violations_follow_schema_position(self, abc_schema):
        fds = FDSet(["C -> A", "B -> A"])
        report = check_bcnf(abc_schema, fds)
        assert report.first_violation == FunctionalDependency("B", "A")
        assert [str(fd) for fd in report.violations] == ["B -> A", "C -> A"]

    def test_scan_order_breaks_ties_by_insertion(self, abc_schema):
        fds = FDSet(["B -> C", "A -> C", "B -> A"])
        assert [str(fd) for fd in scan_order(abc_schema, fds)] == ["A -> C", "B -> C", "B -> A"]

    def test_violation_uses_minimal_left_side(self):
        schema = Schema(["A", "B", "C", "D"])
        report = check_bcnf(schema, FDSet(["A, B -> D", "B -> D"]))
        assert report.violations == [FunctionalDependency("B", "D")]

    def test_superkey_determinant_reduced_to_violation(self):
        # A, B is a superkey of {A, B, C} but B alone determines C.
        report = check_bcnf(Schema(["A", "B", "C"]), FDSet(["A, B -> C", "B -> C"]))
        assert report.first_violation == FunctionalDependency("B", "C")

    def test_unknown_attribute(self, abc_schema):
        with pytest.raises(UnknownAttribute):
            check_bcnf(abc_schema, FDSet(["A -> Z"]))


class TestThirdNormalForm:
    """Test 3NF detection."""

    def test_prime_dependent_is_allowed(self, city_street_schema, city_street_fds):
        assert is_in_3nf(city_street_schema, city_street_fds)
        assert not is_in_bcnf(city_street_schema, city_street_fds)

    def test_transitive_dependency_violates(self, abc_schema, transitive_fds):
        report = check_3nf(abc_schema, transitive_fds)
        assert not report.is_satisfied
        assert report.violations == [FunctionalDependency("B", "C")]
        assert report.keys == [AttributeSet("A")]


class TestSecondNormalForm:
    """Test partial-dependency detection."""

    def test_partial_dependency_violates(self):
        schema = Schema(["A", "B", "C", "D"])
        report = check_2nf(schema, FDSet(["A, B -> C", "B -> D"]))
        assert not report.is_satisfied
        assert report.violations == [FunctionalDependency("B", "D")]

    def test_single_attribute_key_is_2nf(self, abc_schema, transitive_fds):
        assert is_in_2nf(abc_schema, transitive_fds)

    def test_enrollment_has_partial_dependencies(self, enrollment_schema, enrollment_fds):
        report = check_2nf(enrollment_schema, enrollment_fds)
        determinants = {fd.determinant for fd in report.violations}
        assert determinants == {AttributeSet("CourseID"), AttributeSet("StudentID")}


class TestDetermineNormalForm:
    """Test the highest-normal-form summary."""

    @pytest.mark.parametrize(
        "schema, dependencies, expected",
        [
            (["A", "B", "C"], ["A -> B", "A -> C"], NormalForm.BCNF),
            (["City", "Street", "Zip"], ["City, Street -> Zip", "Zip -> City"], NormalForm.THIRD),
            (["A", "B", "C"], ["A -> B", "B -> C"], NormalForm.SECOND),
            (["A", "B", "C", "D"], ["A, B -> C", "B -> D"], NormalForm.FIRST),
        ],
    )
    def test_levels(self, schema, dependencies, expected):
        assert determine_normal_form(Schema(schema), FDSet(dependencies)) is expected

    def test_value_is_label(self):
        assert NormalForm.THIRD.value == "3NF"
        assert NormalForm("BCNF") is NormalForm.BCNF
