"""Attribute-set closure and FD-set closure.

The attribute closure is the fixed point every other algorithm builds on. The
FD-set closure is expressed through it: for each candidate determinant S the
implied FD is ``S -> S+ \\ S``, so Armstrong's axioms never need to be applied
one rule at a time.
"""

from itertools import combinations
from typing import Iterable, Optional, Union

from RELNORM.config.settings import get_normalization_settings
from RELNORM.ir.models.attributes import AttributeSet
from RELNORM.ir.models.dependencies import FDSet, FunctionalDependency
from RELNORM.utils.error_handling import ErrorContext, SearchSpaceTooLarge
from RELNORM.utils.logging import get_logger
from RELNORM.utils.validation.schema_validation import (
    validate_attributes,
    validate_dependencies,
    validate_inputs,
)

logger = get_logger(__name__)


def closure_under(attributes: AttributeSet, dependencies: FDSet) -> AttributeSet:
    """Fixed-point closure without entry validation (callers have validated already)."""
    result = set(attributes.names())
    changed = True
    passes = 0
    while changed:
        changed = False
        passes += 1
        for fd in dependencies:
            dependent = fd.dependent.names()
            if result.issuperset(fd.determinant.names()) and not result.issuperset(dependent):
                result.update(dependent)
                changed = True

    # Keep the typed Attribute objects: inputs first, then whatever the FDs contributed.
    gathered = list(attributes)
    for fd in dependencies:
        gathered.extend(a for a in fd.dependent if a.name in result)
    closure = AttributeSet(gathered)
    logger.debug(f"Closure of {attributes} reached {closure} after {passes} pass(es)")
    return closure


def compute_attribute_closure(
    attributes: Union[AttributeSet, Iterable[str], str],
    dependencies: Union[FDSet, Iterable],
    schema: Optional[AttributeSet] = None,
) -> AttributeSet:
    """
    Compute X+, every attribute functionally determined by X under F.

    Each pass scans every FD and adds its dependent side whenever its
    determinant is already covered; the loop stops after a pass that adds
    nothing. The result does not depend on the order of F.

    Args:
        attributes: The attribute set X
        dependencies: The FD set F
        schema: Governing schema; when given, X and F are checked against it first

    Returns:
        AttributeSet: X+

    Raises:
        EmptySchema: If schema is given and has no attributes
        UnknownAttribute: If X or F references an attribute outside schema
    """
    attributes = AttributeSet.coerce(attributes)
    dependencies = FDSet.coerce(dependencies)
    if schema is not None:
        validate_inputs(schema, dependencies, "compute_attribute_closure", attributes=[attributes])
    return closure_under(attributes, dependencies)


def compute_fd_set_closure(
    dependencies: Union[FDSet, Iterable],
    universe: Optional[AttributeSet] = None,
    determinants: Optional[Iterable[Union[AttributeSet, Iterable[str], str]]] = None,
) -> FDSet:
    """
    Compute F+ as one FD ``S -> S+ \\ S`` per candidate determinant S.

    Two modes:
      - lazy: ``determinants`` lists the sets actually queried;
      - enumeration: every non-empty subset of ``universe`` (default: all
        attributes F references), by increasing size then name order.

    Trivial results (S+ == S) are not emitted. Enumeration is exponential in
    the universe size and refuses universes larger than
    ``normalization.max_closure_universe``.

    Raises:
        UnknownAttribute: If F or a determinant references an attribute outside the universe
        SearchSpaceTooLarge: If enumeration would exceed the configured limit
    """
    dependencies = FDSet.coerce(dependencies)
    universe = AttributeSet.coerce(universe) if universe is not None else dependencies.attributes()
    validate_dependencies(dependencies, universe, "compute_fd_set_closure")

    if determinants is not None:
        candidates = [AttributeSet.coerce(d) for d in determinants]
        for candidate in candidates:
            validate_attributes(candidate, universe, "compute_fd_set_closure")
    else:
        limit = get_normalization_settings().max_closure_universe
        if len(universe) > limit:
            raise SearchSpaceTooLarge(
                message=(
                    f"Enumerating FD closure over {len(universe)} attributes exceeds the limit of {limit}; "
                    f"pass explicit determinants instead"
                ),
                context=ErrorContext(
                    operation="compute_fd_set_closure",
                    additional_context={"universe_size": len(universe), "limit": limit},
                ),
            )
        members = list(universe)
        candidates = [
            AttributeSet(combo)
            for size in range(1, len(members) + 1)
            for combo in combinations(members, size)
        ]

    implied = []
    for candidate in candidates:
        derived = closure_under(candidate, dependencies) - candidate
        if derived:
            implied.append(FunctionalDependency(candidate, derived))

    logger.debug(f"FD closure: {len(implied)} non-trivial FD(s) from {len(candidates)} determinant(s)")
    return FDSet(implied)


def implies(dependencies: FDSet, dependency: FunctionalDependency) -> bool:
    """True iff F implies ``dependency`` (its dependent lies in the closure of its determinant)."""
    return dependency.dependent.issubset(closure_under(dependency.determinant, dependencies))
