"""Normal-form membership tests (2NF, 3NF, BCNF).

Checks run over the FDs as given, after trivial parts are removed (BCNF also
reduces every determinant to a minimal left side first). That is sound when F
is declared over the schema being tested, which holds for user input and for
the projected FD sets the decomposers produce.
"""

from enum import Enum
from itertools import combinations
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from RELNORM.fd.closure import closure_under
from RELNORM.fd.cover import reduce_determinants
from RELNORM.fd.keys import find_all_minimal_keys
from RELNORM.ir.models.attributes import AttributeSet, Schema
from RELNORM.ir.models.dependencies import FDSet, FunctionalDependency
from RELNORM.utils.logging import get_logger
from RELNORM.utils.validation.schema_validation import validate_inputs

logger = get_logger(__name__)


class NormalForm(str, Enum):
    FIRST = "1NF"
    SECOND = "2NF"
    THIRD = "3NF"
    BCNF = "BCNF"


class NormalFormReport(BaseModel):
    """Outcome of one normal-form test, with the violating FDs in scan order."""
    normal_form: NormalForm
    is_satisfied: bool
    violations: List[FunctionalDependency] = Field(default_factory=list)
    keys: List[AttributeSet] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def first_violation(self) -> Optional[FunctionalDependency]:
        return self.violations[0] if self.violations else None


def scan_order(schema: Schema, dependencies: FDSet) -> List[FunctionalDependency]:
    """
    Non-trivial FDs in the deterministic scan order.

    FDs are ordered by the schema positions of their determinant attributes,
    ties broken by insertion order.
    """
    indexed: List[Tuple[Tuple[int, ...], int, FunctionalDependency]] = [
        (schema.position_key(fd.determinant), index, fd)
        for index, fd in enumerate(dependencies.nontrivial())
    ]
    indexed.sort(key=lambda entry: (entry[0], entry[1]))
    return [fd for _, _, fd in indexed]


def _prepare(schema, dependencies, operation: str) -> Tuple[Schema, FDSet]:
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    validate_inputs(schema, dependencies, operation)
    return schema, dependencies


def check_bcnf(schema: Schema, dependencies: FDSet) -> NormalFormReport:
    """
    Test BCNF: every non-trivial FD's determinant must be a superkey.

    Determinants are reduced to minimal left sides before the scan, so a
    violation names the smallest offending determinant. All violations are
    collected; ``first_violation`` is the one the BCNF decomposer splits on.
    """
    schema, dependencies = _prepare(schema, dependencies, "check_bcnf")

    violations = [
        fd for fd in scan_order(schema, reduce_determinants(dependencies))
        if not closure_under(fd.determinant, dependencies).issuperset(schema)
    ]
    if violations:
        logger.debug(f"BCNF violations in {schema}: {[str(fd) for fd in violations]}")
    return NormalFormReport(
        normal_form=NormalForm.BCNF,
        is_satisfied=not violations,
        violations=violations,
    )


def is_in_bcnf(schema: Schema, dependencies: FDSet) -> bool:
    return check_bcnf(schema, dependencies).is_satisfied


def check_3nf(schema: Schema, dependencies: FDSet) -> NormalFormReport:
    """
    Test 3NF: for every non-trivial FD, the determinant is a superkey or every
    dependent attribute outside the determinant is prime.
    """
    schema, dependencies = _prepare(schema, dependencies, "check_3nf")
    keys = find_all_minimal_keys(schema, dependencies)
    prime = AttributeSet(a for key in keys for a in key)

    violations = []
    for fd in scan_order(schema, dependencies):
        if closure_under(fd.determinant, dependencies).issuperset(schema):
            continue
        if not fd.dependent.issubset(prime):
            violations.append(fd)

    return NormalFormReport(
        normal_form=NormalForm.THIRD,
        is_satisfied=not violations,
        violations=violations,
        keys=keys,
    )


def is_in_3nf(schema: Schema, dependencies: FDSet) -> bool:
    return check_3nf(schema, dependencies).is_satisfied


def check_2nf(schema: Schema, dependencies: FDSet) -> NormalFormReport:
    """
    Test 2NF: no non-prime attribute depends on a proper subset of a candidate key.

    Each violation is reported as ``S -> A...`` for the offending key subset S
    and the non-prime attributes it determines.
    """
    schema, dependencies = _prepare(schema, dependencies, "check_2nf")
    keys = find_all_minimal_keys(schema, dependencies)
    prime = AttributeSet(a for key in keys for a in key)
    non_prime = schema - prime

    violations: List[FunctionalDependency] = []
    for key in keys:
        members = list(key)
        for size in range(len(members)):
            for combo in combinations(members, size):
                subset = AttributeSet(combo)
                partial = (closure_under(subset, dependencies) & non_prime) - subset
                if partial:
                    violations.append(FunctionalDependency(subset, partial))

    violations = list(FDSet(violations))
    return NormalFormReport(
        normal_form=NormalForm.SECOND,
        is_satisfied=not violations,
        violations=violations,
        keys=keys,
    )


def is_in_2nf(schema: Schema, dependencies: FDSet) -> bool:
    return check_2nf(schema, dependencies).is_satisfied


def determine_normal_form(schema: Schema, dependencies: FDSet) -> NormalForm:
    """Highest normal form the schema satisfies (1NF is assumed for any relation)."""
    if is_in_bcnf(schema, dependencies):
        return NormalForm.BCNF
    if is_in_3nf(schema, dependencies):
        return NormalForm.THIRD
    if is_in_2nf(schema, dependencies):
        return NormalForm.SECOND
    return NormalForm.FIRST
