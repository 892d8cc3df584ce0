"""Pytest fixtures shared by the RELNORM test suite."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from RELNORM.ir.models import Schema, FDSet


@pytest.fixture
def abc_schema():
    """Schema {A, B, C}."""
    return Schema(["A", "B", "C"])


@pytest.fixture
def transitive_fds():
    """A -> B, B -> C: B -> C violates BCNF over {A, B, C}."""
    return FDSet(["A -> B", "B -> C"])


@pytest.fixture
def enrollment_schema():
    """Denormalised enrollment table with typed columns."""
    return Schema([
        "StudentID:INT",
        "StudentName:VARCHAR",
        "CourseID:INT",
        "CourseTitle:VARCHAR",
        "InstructorID:INT",
        "InstructorName:VARCHAR",
        "Grade:CHAR",
    ])


@pytest.fixture
def enrollment_fds():
    return FDSet([
        "StudentID -> StudentName",
        "CourseID -> CourseTitle, InstructorID",
        "InstructorID -> InstructorName",
        "StudentID, CourseID -> Grade",
    ])


@pytest.fixture
def city_street_schema():
    """Classic 3NF-but-not-BCNF relation: City, Street -> Zip and Zip -> City."""
    return Schema(["City", "Street", "Zip"])


@pytest.fixture
def city_street_fds():
    return FDSet(["City, Street -> Zip", "Zip -> City"])
