"""Minimal (canonical) covers of FD sets."""

from typing import Dict, List

from RELNORM.fd.closure import closure_under, implies
from RELNORM.ir.models.attributes import AttributeSet
from RELNORM.ir.models.dependencies import FDSet, FunctionalDependency
from RELNORM.utils.logging import get_logger

logger = get_logger(__name__)


def split_dependencies(dependencies: FDSet) -> FDSet:
    """One FD per dependent attribute; trivial parts are dropped."""
    singles: List[FunctionalDependency] = []
    for fd in dependencies.nontrivial():
        for attr in fd.dependent:
            singles.append(FunctionalDependency(fd.determinant, AttributeSet([attr])))
    return FDSet(singles)


def reduce_determinants(dependencies: FDSet) -> FDSet:
    """
    Strip extraneous attributes from every non-trivial FD's left side.

    An attribute is extraneous when the dependent side still lies in the
    closure of the determinant without it. Attributes are tried in name
    order against the whole of F; right sides are kept as given (minus the
    reduced determinant). The result is equivalent to F.
    """
    reduced: List[FunctionalDependency] = []
    for fd in dependencies.nontrivial():
        determinant = fd.determinant
        for attr in fd.determinant:
            trial = determinant - AttributeSet([attr])
            if fd.dependent.issubset(closure_under(trial, dependencies)):
                determinant = trial
        if determinant != fd.determinant:
            logger.debug(f"Reduced {fd} to determinant {determinant}")
            fd = FunctionalDependency(determinant, fd.dependent - determinant)
        reduced.append(fd)
    return FDSet(reduced)


def minimal_cover(dependencies: FDSet) -> FDSet:
    """
    Compute a minimal cover of F.

    1. Split right sides into single attributes.
    2. Remove extraneous determinant attributes (tried in name order).
    3. Remove FDs implied by the remaining ones (tried in FD order).

    The result is equivalent to F and deterministic for a given FD order.
    """
    cover = list(reduce_determinants(split_dependencies(dependencies)))
    index = 0
    while index < len(cover):
        others = FDSet(cover[:index] + cover[index + 1:])
        if implies(others, cover[index]):
            logger.debug(f"Dropping redundant dependency {cover[index]}")
            del cover[index]
        else:
            index += 1

    return FDSet(cover)


def merge_dependents(dependencies: FDSet) -> FDSet:
    """Combine FDs sharing a determinant, keeping first-appearance order."""
    grouped: Dict[AttributeSet, AttributeSet] = {}
    for fd in dependencies:
        grouped[fd.determinant] = grouped.get(fd.determinant, AttributeSet()) | fd.dependent
    return FDSet(FunctionalDependency(det, dep) for det, dep in grouped.items())


def are_equivalent(first: FDSet, second: FDSet) -> bool:
    """True iff each FD set implies every FD of the other."""
    return all(implies(second, fd) for fd in first) and all(implies(first, fd) for fd in second)
