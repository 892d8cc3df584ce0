"""IR (Intermediate Representation) models."""

from .attributes import (
    SQL_TYPES,
    Attribute,
    AttributeSet,
    Schema,
    validate_type_name,
)
from .dependencies import FunctionalDependency, FDSet
from .relation import Relation

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
