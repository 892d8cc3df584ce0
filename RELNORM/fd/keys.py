"""Candidate-key discovery and key tests."""

from itertools import combinations
from typing import List

from RELNORM.config.settings import get_normalization_settings
from RELNORM.fd.closure import closure_under
from RELNORM.ir.models.attributes import AttributeSet, Schema
from RELNORM.ir.models.dependencies import FDSet
from RELNORM.utils.logging import get_logger
from RELNORM.utils.validation.schema_validation import validate_inputs

logger = get_logger(__name__)


def _is_super_key(key: AttributeSet, schema: AttributeSet, dependencies: FDSet) -> bool:
    return closure_under(key, dependencies).issuperset(schema)


def find_all_minimal_keys(schema: Schema, dependencies: FDSet) -> List[AttributeSet]:
    """
    Enumerate every minimal candidate key of ``schema`` under F.

    Attributes never on the right side of a non-trivial FD belong to every
    key; if they already determine the schema they are the only key.
    Otherwise combinations of the attributes appearing on both sides are
    added by increasing size, in schema order, skipping supersets of keys
    already accepted. Attributes only ever on the right side never belong to
    a minimal key and are not tried.

    Worst case is exponential in the number of attributes on both sides.

    Returns:
        List[AttributeSet]: Minimal keys ordered by size, then schema order

    Raises:
        EmptySchema: If the schema has no attributes
        UnknownAttribute: If F references an attribute outside the schema
    """
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    validate_inputs(schema, dependencies, "find_all_minimal_keys")
    nontrivial = dependencies.nontrivial()

    right_side = nontrivial.dependent_attributes()
    left_side = nontrivial.determinant_attributes()
    core = schema.resolve(a for a in schema if a not in right_side)

    if _is_super_key(core, schema, nontrivial):
        logger.debug(f"Key search: attributes outside every right side form the only key {core}")
        return [core]

    pool = [a for a in schema if a in right_side and a in left_side]
    threshold = get_normalization_settings().enumeration_warning_threshold
    if len(pool) > threshold:
        logger.warning(
            f"Key search over {schema} enumerates subsets of {len(pool)} attributes "
            f"(threshold {threshold}); this may be slow"
        )

    keys: List[AttributeSet] = []
    for size in range(1, len(pool) + 1):
        for combo in combinations(pool, size):
            candidate = core | AttributeSet(combo)
            if any(key.issubset(candidate) for key in keys):
                continue
            if _is_super_key(candidate, schema, nontrivial):
                keys.append(candidate)

    logger.debug(f"Key search over {schema}: {len(keys)} minimal key(s) {[str(k) for k in keys]}")
    return keys


def is_super_key(key: AttributeSet, schema: Schema, dependencies: FDSet) -> bool:
    """True iff the closure of ``key`` under F is the whole schema."""
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    key = AttributeSet.coerce(key)
    validate_inputs(schema, dependencies, "is_super_key", attributes=[key])
    return _is_super_key(key, schema, dependencies)


def is_minimal_key(key: AttributeSet, schema: Schema, dependencies: FDSet) -> bool:
    """
    True iff ``key`` is a superkey and no proper subset is one.

    Superkeys are closed under supersets, so checking the subsets that drop a
    single attribute is enough.
    """
    schema = Schema.coerce(schema)
    dependencies = FDSet.coerce(dependencies)
    key = AttributeSet.coerce(key)
    validate_inputs(schema, dependencies, "is_minimal_key", attributes=[key])
    if not _is_super_key(key, schema, dependencies):
        return False
    return not any(
        _is_super_key(key - AttributeSet([attr]), schema, dependencies) for attr in key
    )


def prime_attributes(schema: Schema, dependencies: FDSet) -> AttributeSet:
    """Attributes belonging to at least one minimal key."""
    keys = find_all_minimal_keys(schema, dependencies)
    return schema.resolve(a for key in keys for a in key)
