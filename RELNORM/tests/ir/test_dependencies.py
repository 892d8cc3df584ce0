"""Unit tests for functional dependencies and FD sets."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from RELNORM.ir.models import AttributeSet, FDSet, FunctionalDependency
from RELNORM.utils.error_handling import MalformedDependency


class TestFunctionalDependency:
    """Test FD parsing, equality and triviality."""

    def test_parse_and_render(self):
        fd = FunctionalDependency.parse("B, A -> C")
        assert fd.determinant == AttributeSet("A, B")
        assert fd.dependent == AttributeSet("C")
        assert str(fd) == "A, B -> C"

    def test_unicode_arrow(self):
        assert FunctionalDependency.parse("A → B") == FunctionalDependency("A", "B")

    def test_structural_equality(self):
        first = FunctionalDependency(["A", "B"], ["C"])
        second = FunctionalDependency(AttributeSet("B, A"), "C")
        assert first == second
        assert hash(first) == hash(second)
        assert first != FunctionalDependency("A", "C")

    def test_trivial(self):
        assert FunctionalDependency("A, B", "A").is_trivial()
        assert not FunctionalDependency("A", "A, B").is_trivial()

    def test_nontrivial_part(self):
        assert FunctionalDependency("A", "A, B").nontrivial_part() == FunctionalDependency("A", "B")
        assert FunctionalDependency("A, B", "B").nontrivial_part() is None

    def test_empty_determinant_allowed(self):
        fd = FunctionalDependency.parse("-> A")
        assert len(fd.determinant) == 0
        assert fd.dependent == AttributeSet("A")

    @pytest.mark.parametrize("text", ["A B", "A -> B -> C"])
    def test_malformed_text(self, text):
        with pytest.raises(MalformedDependency):
            FunctionalDependency.parse(text)


class TestFDSet:
    """Test FDSet deduplication and ordering."""

    def test_deduplicates_across_input_forms(self):
        fds = FDSet([
            "A -> B",
            FunctionalDependency("A", "B"),
            {"lhs": ["A"], "rhs": ["B"]},
            (["A"], ["B"]),
        ])
        assert len(fds) == 1

    def test_preserves_insertion_order(self):
        fds = FDSet(["C -> A", "A -> B"])
        assert [str(fd) for fd in fds] == ["C -> A", "A -> B"]
        assert fds[0] == FunctionalDependency("C", "A")

    def test_equality_ignores_order(self):
        assert FDSet(["A -> B", "B -> C"]) == FDSet(["B -> C", "A -> B"])

    def test_nontrivial(self):
        fds = FDSet(["A -> A", "A -> A, B", "B -> C"])
        assert list(fds.nontrivial()) == [
            FunctionalDependency("A", "B"),
            FunctionalDependency("B", "C"),
        ]

    def test_attribute_views(self):
        fds = FDSet(["A -> B", "B, D -> C"])
        assert fds.attributes() == AttributeSet("A, B, C, D")
        assert fds.determinant_attributes() == AttributeSet("A, B, D")
        assert fds.dependent_attributes() == AttributeSet("B, C")

    def test_membership_accepts_text(self):
        assert "A -> B" in FDSet(["A -> B"])

    def test_union_and_with_dependency(self):
        fds = FDSet(["A -> B"]).union(["B -> C", "A -> B"]).with_dependency("C -> D")
        assert len(fds) == 3

    def test_dict_without_sides_rejected(self):
        with pytest.raises(MalformedDependency):
            FDSet([{"left": ["A"], "right": ["B"]}])

    def test_parse_lines(self):
        fds = FDSet.parse(["A -> B", "B → C"])
        assert fds == FDSet(["A -> B", "B -> C"])
