"""BCNF decomposition, 3NF synthesis, and decomposition quality checks."""

from typing import Iterable, List, NamedTuple, Union

from RELNORM.fd.closure import closure_under
from RELNORM.fd.cover import merge_dependents, minimal_cover
from RELNORM.fd.keys import find_all_minimal_keys
from RELNORM.fd.normal_forms import check_bcnf
from RELNORM.fd.projection import project_fd_set
from RELNORM.ir.models.attributes import AttributeSet, Schema
from RELNORM.ir.models.dependencies import FDSet
from RELNORM.utils.logging import get_logger
from RELNORM.utils.validation.schema_validation import validate_inputs

logger = get_logger(__name__)


class SubSchema(NamedTuple):
    """One relation of a decomposition: its attributes and projected FDs."""
    schema: Schema
    dependencies: FDSet

    def __str__(self) -> str:
        return f"{self.schema} with {self.dependencies!r}"


PartLike = Union[SubSchema, AttributeSet, Iterable[str]]


def _drop_contained(schemas: List[AttributeSet]) -> List[int]:
    """Indexes of the schemas not contained in another; of equal schemas the first is kept."""
    kept: List[int] = []
    for index, part in enumerate(schemas):
        contained = any(
            part.issubset(other) and (part != other or other_index < index)
            for other_index, other in enumerate(schemas)
            if other_index != index
        )
        if not contained:
            kept.append(index)
    return kept


def decompose_to_bcnf(schema: Schema, dependencies: FDSet) -> List[SubSchema]:
    """
    Decompose ``schema`` into BCNF sub-schemas with their projected FDs.

    Recursive split on the first violation in scan order (schema position of
    the determinant, then FD insertion order). For a violation ``X -> Y`` the
    schema R becomes ``R1 = X+ ∩ R`` and ``R2 = (R \\ R1) ∪ X``. R1 is a
    proper subset because X is not a superkey, R2 because Y \\ X is non-empty,
    so the recursion depth is bounded by |R|. The split is lossless because
    the shared attributes X determine all of R1. Sub-schemas contained in
    another returned sub-schema are dropped, which leaves the join unchanged.
    Dependency preservation is not guaranteed.

    Args:
        schema: Relation schema
        dependencies: FD set declared over the schema

    Returns:
        List[SubSchema]: BCNF sub-schemas, left branch first; a schema already
        in BCNF comes back as a single entry

    Raises:
        EmptySchema: If the schema has no attributes
        UnknownAttribute: If F references an attribute outside the schema
    """
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    validate_inputs(schema, dependencies, "decompose_to_bcnf")

    split = _split_bcnf(schema, dependencies, depth=0)
    parts = [split[i] for i in _drop_contained([part.schema for part in split])]
    logger.info(
        f"BCNF decomposition of {schema}: {len(parts)} relation(s) "
        f"{', '.join(str(part.schema) for part in parts)}"
    )
    return parts


def _split_bcnf(schema: Schema, dependencies: FDSet, depth: int) -> List[SubSchema]:
    report = check_bcnf(schema, dependencies)
    if report.is_satisfied:
        return [SubSchema(schema, project_fd_set(schema, schema, dependencies))]

    violation = report.first_violation
    left = Schema(schema & closure_under(violation.determinant, dependencies))
    right = Schema((schema - left) | schema.resolve(violation.determinant))
    logger.debug(
        f"{'  ' * depth}Splitting {schema} on {violation}: {left} and {right}"
    )

    left_fds = project_fd_set(schema, left, dependencies)
    right_fds = project_fd_set(schema, right, dependencies)
    return (
        _split_bcnf(left, left_fds, depth + 1)
        + _split_bcnf(right, right_fds, depth + 1)
    )


def decompose_to_3nf(schema: Schema, dependencies: FDSet) -> List[SubSchema]:
    """
    Synthesize a lossless, dependency-preserving 3NF decomposition.

    One sub-schema per determinant of the minimal cover (dependents merged),
    plus a candidate key when no sub-schema already contains one. Sub-schemas
    contained in another are dropped.

    Raises:
        EmptySchema: If the schema has no attributes
        UnknownAttribute: If F references an attribute outside the schema
    """
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    validate_inputs(schema, dependencies, "decompose_to_3nf")

    keys = find_all_minimal_keys(schema, dependencies)
    cover = merge_dependents(minimal_cover(dependencies))
    candidates = [schema.resolve(fd.determinant | fd.dependent) for fd in cover]

    if not any(key.issubset(part) for part in candidates for key in keys):
        candidates.append(keys[0])

    kept = [candidates[i] for i in _drop_contained(candidates)]

    parts = [
        SubSchema(Schema(part), project_fd_set(schema, part, dependencies))
        for part in kept
    ]
    logger.info(
        f"3NF synthesis of {schema}: {len(parts)} relation(s) "
        f"{', '.join(str(part.schema) for part in parts)}"
    )
    return parts


def _part_schema(part: PartLike) -> AttributeSet:
    if isinstance(part, SubSchema):
        return part.schema
    return AttributeSet.coerce(part)


def lost_dependencies(dependencies: FDSet, parts: Iterable[PartLike]) -> FDSet:
    """
    FDs of F not enforceable from the sub-schemas' projected dependencies.

    For each ``X -> Y`` the set Z = X is grown with ``(Z ∩ Ri)+ ∩ Ri`` over
    every sub-schema Ri until it stops changing; the FD is preserved iff Y ⊆ Z.
    This never materialises the projections.
    """
    dependencies = FDSet.coerce(dependencies)
    schemas = [_part_schema(part) for part in parts]

    lost = []
    for fd in dependencies.nontrivial():
        reached = fd.determinant
        changed = True
        while changed:
            changed = False
            for part in schemas:
                gained = closure_under(reached & part, dependencies) & part
                if not gained.issubset(reached):
                    reached = reached | gained
                    changed = True
        if not fd.dependent.issubset(reached):
            lost.append(fd)

    if lost:
        logger.debug(f"Dependencies not preserved: {[str(fd) for fd in lost]}")
    return FDSet(lost)


def is_dependency_preserving(dependencies: FDSet, parts: Iterable[PartLike]) -> bool:
    return not lost_dependencies(dependencies, parts)


def covers_schema(schema: AttributeSet, parts: Iterable[PartLike]) -> bool:
    """True iff the union of the sub-schemas is exactly the original attribute set."""
    union = AttributeSet()
    for part in parts:
        union = union | _part_schema(part)
    return union == AttributeSet.coerce(schema)
