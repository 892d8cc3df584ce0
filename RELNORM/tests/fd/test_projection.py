"""Unit tests for FD projection onto sub-schemas."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from RELNORM.fd.projection import project_fd_set
from RELNORM.ir.models import AttributeSet, FDSet, FunctionalDependency
from RELNORM.utils.error_handling import EmptySchema, UnknownAttribute


def test_projection_onto_whole_schema_is_minimal_cover(abc_schema):
    projected = project_fd_set(abc_schema, abc_schema, FDSet(["A -> B", "A -> C"]))
    assert projected == FDSet(["A -> B", "A -> C"])


def test_projection_carries_transitive_dependency(abc_schema, transitive_fds):
    projected = project_fd_set(abc_schema, AttributeSet("A, C"), transitive_fds)
    assert list(projected) == [FunctionalDependency("A", "C")]


def test_projection_without_applicable_dependencies(abc_schema, transitive_fds):
    assert len(project_fd_set(abc_schema, AttributeSet("C"), transitive_fds)) == 0


def test_projected_dependencies_stay_inside_sub_schema(enrollment_schema, enrollment_fds):
    sub = AttributeSet("CourseID, Grade, StudentID, StudentName")
    projected = project_fd_set(enrollment_schema, sub, enrollment_fds)
    assert projected.attributes().issubset(sub)
    assert projected == FDSet(["StudentID -> StudentName", "CourseID, StudentID -> Grade"])


def test_sub_schema_outside_schema(abc_schema, transitive_fds):
    with pytest.raises(UnknownAttribute):
        project_fd_set(abc_schema, AttributeSet("A, Z"), transitive_fds)


def test_empty_sub_schema(abc_schema, transitive_fds):
    with pytest.raises(EmptySchema):
        project_fd_set(abc_schema, AttributeSet(), transitive_fds)
