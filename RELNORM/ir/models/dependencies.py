"""Functional dependencies and insertion-ordered FD sets."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from RELNORM.ir.models.attributes import AttributeSet
from RELNORM.utils.error_handling import ErrorContext, MalformedDependency

_ARROW = re.compile(r"->|→")


class FunctionalDependency(BaseModel):
    """determinant -> dependent; equal when both sides are set-equal."""
    determinant: AttributeSet
    dependent: AttributeSet

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, determinant: Any, dependent: Any, **data) -> None:
        super().__init__(determinant=determinant, dependent=dependent, **data)

    @field_validator("determinant", "dependent", mode="before")
    @classmethod
    def _coerce_side(cls, value: Any) -> AttributeSet:
        return AttributeSet.coerce(value)

    @classmethod
    def parse(cls, text: str) -> "FunctionalDependency":
        """Parse ``"A, B -> C"``; an empty left side is a constant dependency."""
        parts = _ARROW.split(text)
        if len(parts) != 2:
            raise MalformedDependency(
                message=f"Cannot parse '{text}' into a functional dependency",
                context=ErrorContext(operation="parse_dependency", dependency=text),
            )
        lhs, rhs = parts
        return cls(AttributeSet(lhs), AttributeSet(rhs))

    def is_trivial(self) -> bool:
        return self.dependent.issubset(self.determinant)

    def nontrivial_part(self) -> Optional["FunctionalDependency"]:
        """The FD with the determinant removed from the right side; None if nothing is left."""
        remaining = self.dependent - self.determinant
        if not remaining:
            return None
        if remaining == self.dependent:
            return self
        return FunctionalDependency(self.determinant, remaining)

    def attributes(self) -> AttributeSet:
        return self.determinant | self.dependent

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FunctionalDependency):
            return self.determinant == other.determinant and self.dependent == other.dependent
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.determinant, self.dependent))

    def __str__(self) -> str:
        return f"{', '.join(self.determinant.names())} -> {', '.join(self.dependent.names())}"

    def __repr__(self) -> str:
        return f"FunctionalDependency({self})"


DependencyLike = Union[FunctionalDependency, str, Tuple[Any, Any], Dict[str, Any]]


def _as_dependency(item: DependencyLike) -> FunctionalDependency:
    if isinstance(item, FunctionalDependency):
        return item
    if isinstance(item, str):
        return FunctionalDependency.parse(item)
    if isinstance(item, dict):
        if "lhs" not in item or "rhs" not in item:
            raise MalformedDependency(
                message=f"Dependency dict needs 'lhs' and 'rhs' keys, got {sorted(item)}",
                context=ErrorContext(operation="parse_dependency", dependency=str(item)),
            )
        return FunctionalDependency(item["lhs"], item["rhs"])
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return FunctionalDependency(item[0], item[1])
    raise MalformedDependency(
        message=f"Cannot interpret {item!r} as a functional dependency",
        context=ErrorContext(operation="parse_dependency", dependency=repr(item)),
    )


class FDSet:
    """Immutable set of FDs, deduplicated structurally, iterated in insertion order."""

    __slots__ = ("_dependencies",)

    def __init__(self, dependencies: Iterable[DependencyLike] = ()) -> None:
        ordered: Dict[FunctionalDependency, None] = {}
        for item in dependencies:
            ordered.setdefault(_as_dependency(item), None)
        self._dependencies: Tuple[FunctionalDependency, ...] = tuple(ordered)

    @classmethod
    def coerce(cls, value: Union["FDSet", Iterable[DependencyLike], None]) -> "FDSet":
        if isinstance(value, FDSet):
            return value
        return cls(value or ())

    def __iter__(self) -> Iterator[FunctionalDependency]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __getitem__(self, index: int) -> FunctionalDependency:
        return self._dependencies[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            item = FunctionalDependency.parse(item)
        return item in self._dependencies

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FDSet):
            return frozenset(self._dependencies) == frozenset(other._dependencies)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._dependencies))

    def __repr__(self) -> str:
        return f"FDSet([{'; '.join(str(fd) for fd in self)}])"

    def attributes(self) -> AttributeSet:
        """Every attribute referenced on either side."""
        return AttributeSet(a for fd in self for a in fd.attributes())

    def determinant_attributes(self) -> AttributeSet:
        return AttributeSet(a for fd in self for a in fd.determinant)

    def dependent_attributes(self) -> AttributeSet:
        return AttributeSet(a for fd in self for a in fd.dependent)

    def nontrivial(self) -> "FDSet":
        """Drop trivial FDs and strip determinant attributes from the right sides."""
        return FDSet(part for part in (fd.nontrivial_part() for fd in self) if part is not None)

    def union(self, other: Iterable[DependencyLike]) -> "FDSet":
        return FDSet([*self._dependencies, *FDSet.coerce(other)])

    def with_dependency(self, dependency: DependencyLike) -> "FDSet":
        return FDSet([*self._dependencies, dependency])

    @classmethod
    def parse(cls, lines: Iterable[str]) -> "FDSet":
        return cls(FunctionalDependency.parse(line) for line in lines)
