"""Unit tests for the Relation model and its algorithm delegates."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from RELNORM.fd.normal_forms import NormalForm
from RELNORM.ir.models import AttributeSet, FDSet, Relation
from RELNORM.utils.error_handling import DuplicateAttribute, UnknownAttribute


@pytest.fixture
def transitive_relation():
    return Relation("R", ["A:INT", "B", "C"], ["A -> B", "B -> C"])


def test_construction_coerces_inputs(transitive_relation):
    assert transitive_relation.schema == AttributeSet("A, B, C")
    assert transitive_relation.dependencies == FDSet(["A -> B", "B -> C"])
    assert str(transitive_relation) == "R(A:INT, B, C)"


def test_dependencies_must_use_declared_attributes():
    with pytest.raises(UnknownAttribute) as exc_info:
        Relation("R", ["A", "B"], ["A -> Z"])
    assert exc_info.value.context.relation_name == "R"


def test_duplicate_attributes_rejected():
    with pytest.raises(DuplicateAttribute):
        Relation("R", ["A", "A"])


def test_identity_by_name(transitive_relation):
    assert transitive_relation == Relation("R", ["X"])
    assert len({transitive_relation, Relation("R", ["X"])}) == 1


def test_delegates(transitive_relation):
    assert transitive_relation.closure_of("B") == AttributeSet("B, C")
    assert transitive_relation.candidate_keys() == [AttributeSet("A")]
    assert transitive_relation.is_super_key("A")
    assert not transitive_relation.is_minimal_key("A, B")
    assert not transitive_relation.is_in_bcnf()
    assert not transitive_relation.is_in_3nf()
    assert transitive_relation.normal_form() is NormalForm.SECOND


def test_decompose_bcnf_names_parts_by_key(transitive_relation):
    parts = transitive_relation.decompose_bcnf()
    assert [part.name for part in parts] == ["R_B", "R_A"]
    assert parts[1].schema.get("A").type == "INT"
    assert all(part.is_in_bcnf() for part in parts)


def test_decompose_3nf(transitive_relation):
    parts = transitive_relation.decompose_3nf()
    assert [part.name for part in parts] == ["R_A", "R_B"]


def test_relation_in_bcnf_keeps_its_name():
    relation = Relation("Course", ["CourseID", "Title"], ["CourseID -> Title"])
    parts = relation.decompose_bcnf()
    assert len(parts) == 1
    assert parts[0].name == "Course"
