"""Unit tests for the schema/FD entry checks."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from RELNORM.ir.models import AttributeSet, FDSet, Schema
from RELNORM.utils.error_handling import EmptySchema, UnknownAttribute
from RELNORM.utils.validation import find_schema_issues, validate_inputs


def test_valid_inputs_pass(abc_schema, transitive_fds):
    validate_inputs(abc_schema, transitive_fds, "test", attributes=[AttributeSet("A")])


def test_empty_schema_reported_first():
    with pytest.raises(EmptySchema) as exc_info:
        validate_inputs(Schema([]), FDSet(["A -> Z"]), "check_bcnf", relation_name="R")
    assert exc_info.value.context.relation_name == "R"
    assert exc_info.value.context.operation == "check_bcnf"


def test_first_offending_dependency_reported(abc_schema):
    fds = FDSet(["A -> B", "B -> Y", "A -> Z"])
    with pytest.raises(UnknownAttribute) as exc_info:
        validate_inputs(abc_schema, fds, "check_bcnf")
    assert exc_info.value.context.dependency == "B -> Y"
    assert exc_info.value.context.attribute_name == "Y"


def test_unknown_query_attribute(abc_schema):
    with pytest.raises(UnknownAttribute) as exc_info:
        validate_inputs(abc_schema, FDSet(), "is_super_key", attributes=[AttributeSet("A, W")])
    assert exc_info.value.context.attribute_name == "W"
    assert exc_info.value.context.dependency is None


def test_find_schema_issues_collects_everything():
    issues = find_schema_issues(Schema([]), FDSet(["A -> A", "A -> Z"]))
    assert issues[0] == "Schema has no attributes"
    assert len(issues) == 4
    assert any("trivial" in issue for issue in issues)


def test_find_schema_issues_clean(abc_schema, transitive_fds):
    assert find_schema_issues(abc_schema, transitive_fds) == []
