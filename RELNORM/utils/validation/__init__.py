"""Input validation for the normalization algorithms."""

from .schema_validation import (
    validate_schema,
    validate_attributes,
    validate_dependencies,
    validate_inputs,
    find_schema_issues,
)

__all__ = [
    "validate_schema",
    "validate_attributes",
    "validate_dependencies",
    "validate_inputs",
    "find_schema_issues",
]
