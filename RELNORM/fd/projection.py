"""Projection of an FD set onto a sub-schema."""

from itertools import combinations
from typing import List

from RELNORM.config.settings import get_normalization_settings
from RELNORM.fd.closure import closure_under
from RELNORM.fd.cover import minimal_cover
from RELNORM.ir.models.attributes import AttributeSet
from RELNORM.ir.models.dependencies import FDSet, FunctionalDependency
from RELNORM.utils.logging import get_logger
from RELNORM.utils.validation.schema_validation import validate_inputs, validate_schema

logger = get_logger(__name__)


def project_fd_set(schema: AttributeSet, sub_schema: AttributeSet, dependencies: FDSet) -> FDSet:
    """
    Project F onto the attributes of ``sub_schema``.

    For each candidate determinant S of the sub-schema R the projected FD is
    ``S -> (S+ ∩ R) \\ S``. Candidates are restricted to subsets of the
    attributes that appear on some FD's left side: any other attribute only
    determines itself, so adding it to S only yields FDs implied by
    augmentation. Supersets of a set already determining all of R are skipped
    for the same reason. The emitted FDs are returned as a minimal cover.

    Args:
        schema: Schema F is declared over
        sub_schema: Attributes to project onto (must lie within schema)
        dependencies: The FD set F

    Returns:
        FDSet: Minimal cover of the projection, single-attribute right sides

    Raises:
        EmptySchema: If schema or sub_schema is empty
        UnknownAttribute: If sub_schema or F references attributes outside schema
    """
    dependencies = FDSet.coerce(dependencies)
    validate_inputs(schema, dependencies, "project_fd_set", attributes=[sub_schema])
    validate_schema(sub_schema, "project_fd_set")

    left_side = dependencies.determinant_attributes()
    pool = [a for a in sub_schema if a in left_side]
    threshold = get_normalization_settings().enumeration_warning_threshold
    if len(pool) > threshold:
        logger.warning(
            f"Projecting onto {sub_schema} enumerates subsets of {len(pool)} attributes "
            f"(threshold {threshold}); this may be slow"
        )

    emitted: List[FunctionalDependency] = []
    superkeys: List[AttributeSet] = []
    for size in range(len(pool) + 1):
        for combo in combinations(pool, size):
            candidate = AttributeSet(combo)
            if any(key.issubset(candidate) for key in superkeys):
                continue
            reach = closure_under(candidate, dependencies) & sub_schema
            derived = reach - candidate
            if derived:
                emitted.append(FunctionalDependency(candidate, derived))
            if reach == sub_schema:
                superkeys.append(candidate)

    projected = minimal_cover(FDSet(emitted))
    logger.debug(f"Projected {len(dependencies)} FD(s) onto {sub_schema}: {projected}")
    return projected
