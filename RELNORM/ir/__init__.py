"""Intermediate Representation (IR): attributes, schemas, dependencies, relations."""

from .models import (
    SQL_TYPES,
    Attribute,
    AttributeSet,
    Schema,
    validate_type_name,
    FunctionalDependency,
    FDSet,
    Relation,
)

__all__ = [
    "SQL_TYPES",
    "Attribute",
    "AttributeSet",
    "Schema",
    "validate_type_name",
    "FunctionalDependency",
    "FDSet",
    "Relation",
]
