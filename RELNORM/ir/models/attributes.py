"""Attributes, attribute sets and schemas.

Attributes are identified by name alone; the SQL type is metadata carried for
diagnostics. ``AttributeSet`` is the immutable set used for FD sides and
closures, ``Schema`` adds the total order used for positional access and for
deterministic scans.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from RELNORM.utils.logging import get_logger
from RELNORM.utils.error_handling import (
    ErrorContext,
    DuplicateAttribute,
    InvalidType,
    UnknownAttribute,
)

logger = get_logger(__name__)

SQL_TYPES: FrozenSet[str] = frozenset({
    "INT",
    "INTEGER",
    "CHAR",
    "VARCHAR",
    "BIT",
    "BIT VARYING",
    "BOOLEAN",
    "SMALLINT",
    "FLOAT",
    "REAL",
    "DOUBLE PRECISION",
    "DECIMAL",
    "DATE",
    "TIME",
})


def validate_type_name(type_name: Optional[str], strict: bool = False) -> Optional[str]:
    """
    Normalise a declared type name against the SQL type whitelist.

    Matching ignores case and repeated inner whitespace ("double  precision"
    is DOUBLE PRECISION). Unknown names degrade to None unless ``strict``.

    Args:
        type_name: Declared type name, or None
        strict: Raise InvalidType instead of degrading to None

    Returns:
        The canonical type name, or None when no (valid) type was declared

    Raises:
        InvalidType: If strict and the name is not recognised
    """
    if type_name is None:
        return None
    canonical = " ".join(str(type_name).split()).upper()
    if not canonical:
        return None
    if canonical in SQL_TYPES:
        return canonical
    if strict:
        raise InvalidType(
            message=f"Unrecognised type name '{type_name}'",
            context=ErrorContext(operation="validate_type_name", additional_context={"type": type_name}),
        )
    logger.warning(f"Unrecognised type name '{type_name}'; treating attribute as untyped")
    return None


class Attribute(BaseModel):
    """A named column; equality and hashing use the name only."""
    name: str
    type: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def __init__(self, name: str, type: Optional[str] = None, **data) -> None:
        super().__init__(name=name, type=type, **data)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("attribute name must not be empty")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: Optional[str]) -> Optional[str]:
        return validate_type_name(value)

    @classmethod
    def parse(cls, text: str) -> "Attribute":
        """Build an attribute from its textual form, ``name`` or ``name:TYPE``."""
        name, _, type_name = text.partition(":")
        return cls(name, type_name or None)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Attribute):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: "Attribute") -> bool:
        return self.name < other.name

    def __str__(self) -> str:
        return f"{self.name}:{self.type}" if self.type else self.name


AttributeLike = Union[Attribute, str]


def _as_attribute(item: AttributeLike) -> Attribute:
    if isinstance(item, Attribute):
        return item
    if isinstance(item, str):
        return Attribute.parse(item)
    raise TypeError(f"expected Attribute or str, got {type(item).__name__}")


def _split_names(text: str) -> Iterable[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


class AttributeSet:
    """Immutable set of attributes keyed by name, iterated in name order."""

    __slots__ = ("_members", "_hash")

    def __init__(self, attributes: Union[Iterable[AttributeLike], str] = ()) -> None:
        if isinstance(attributes, str):
            attributes = _split_names(attributes)
        members: Dict[str, Attribute] = {}
        for item in attributes:
            attr = _as_attribute(item)
            members.setdefault(attr.name, attr)
        self._members: Dict[str, Attribute] = dict(sorted(members.items()))
        self._hash: Optional[int] = None

    @classmethod
    def coerce(cls, value: Union["AttributeSet", AttributeLike, Iterable[AttributeLike], None]) -> "AttributeSet":
        """Accept an AttributeSet, one attribute/name, a comma list, or an iterable of either."""
        if isinstance(value, AttributeSet):
            return value
        if value is None:
            return AttributeSet()
        if isinstance(value, Attribute):
            return AttributeSet([value])
        return AttributeSet(value)

    # -- container protocol -------------------------------------------------

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Attribute):
            return item.name in self._members
        if isinstance(item, str):
            return item in self._members
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeSet):
            return self._members.keys() == other._members.keys()
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._members))
        return self._hash

    def __repr__(self) -> str:
        return f"{type(self).__name__}({{{', '.join(str(a) for a in self)}}})"

    def __str__(self) -> str:
        return "{" + ", ".join(self._members) + "}"

    def names(self) -> Tuple[str, ...]:
        return tuple(self._members)

    def get(self, name: str) -> Optional[Attribute]:
        return self._members.get(name)

    # -- set algebra --------------------------------------------------------

    def issubset(self, other: "AttributeSet") -> bool:
        return self._members.keys() <= other._members.keys()

    def issuperset(self, other: "AttributeSet") -> bool:
        return self._members.keys() >= other._members.keys()

    def isdisjoint(self, other: "AttributeSet") -> bool:
        return self._members.keys().isdisjoint(other._members.keys())

    def union(self, *others: "AttributeSet") -> "AttributeSet":
        merged = list(self)
        for other in others:
            merged.extend(other)
        return AttributeSet(merged)

    def intersection(self, other: "AttributeSet") -> "AttributeSet":
        return AttributeSet(a for a in self if a.name in other._members)

    def difference(self, other: "AttributeSet") -> "AttributeSet":
        return AttributeSet(a for a in self if a.name not in other._members)

    def __le__(self, other: "AttributeSet") -> bool:
        return self.issubset(other)

    def __lt__(self, other: "AttributeSet") -> bool:
        return self.issubset(other) and len(self) < len(other)

    def __ge__(self, other: "AttributeSet") -> bool:
        return self.issuperset(other)

    def __gt__(self, other: "AttributeSet") -> bool:
        return self.issuperset(other) and len(self) > len(other)

    def __or__(self, other: "AttributeSet") -> "AttributeSet":
        return self.union(other)

    def __and__(self, other: "AttributeSet") -> "AttributeSet":
        return self.intersection(other)

    def __sub__(self, other: "AttributeSet") -> "AttributeSet":
        return self.difference(other)


class Schema(AttributeSet):
    """Ordered attribute set of a relation; rejects duplicate names."""

    __slots__ = ("_ordered", "_positions")

    def __init__(self, attributes: Union[Iterable[AttributeLike], str] = ()) -> None:
        if isinstance(attributes, str):
            attributes = _split_names(attributes)
        resolved = [_as_attribute(item) for item in attributes]
        seen = set()
        for attr in resolved:
            if attr.name in seen:
                raise DuplicateAttribute(
                    message=f"Attribute '{attr.name}' is declared more than once",
                    context=ErrorContext(operation="schema_construction", attribute_name=attr.name),
                )
            seen.add(attr.name)
        super().__init__(resolved)
        self._ordered: Tuple[Attribute, ...] = tuple(self._members.values())
        self._positions: Dict[str, int] = {attr.name: i for i, attr in enumerate(self._ordered)}

    @classmethod
    def coerce(cls, value: Union[AttributeSet, AttributeLike, Iterable[AttributeLike], None]) -> "Schema":
        """Like ``AttributeSet.coerce``, but raw name lists keep their duplicates so they are rejected."""
        if isinstance(value, Schema):
            return value
        if value is None:
            return cls()
        if isinstance(value, Attribute):
            return cls([value])
        return cls(value)

    def __getitem__(self, index: int) -> Attribute:
        return self._ordered[index]

    def index_of(self, attribute: AttributeLike) -> int:
        name = attribute.name if isinstance(attribute, Attribute) else attribute
        try:
            return self._positions[name]
        except KeyError:
            raise UnknownAttribute(
                message=f"Attribute '{name}' is not declared in schema {self}",
                context=ErrorContext(operation="schema_lookup", attribute_name=name),
            ) from None

    def position_key(self, attributes: AttributeSet) -> Tuple[int, ...]:
        """Sort key placing attribute sets in schema order (smallest position first)."""
        return tuple(sorted(self.index_of(a) for a in attributes))

    def resolve(self, attributes: Union[AttributeSet, Iterable[AttributeLike], str]) -> AttributeSet:
        """Map names onto the declared (typed) attributes of this schema."""
        requested = AttributeSet.coerce(attributes)
        return AttributeSet(self._ordered[self.index_of(a)] for a in requested)
