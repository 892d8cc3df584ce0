"""Functional-dependency algorithms: closures, keys, normal forms, decomposition."""

from .closure import compute_attribute_closure, compute_fd_set_closure, implies
from .cover import minimal_cover, merge_dependents, reduce_determinants, split_dependencies, are_equivalent
from .projection import project_fd_set
from .keys import find_all_minimal_keys, is_super_key, is_minimal_key, prime_attributes
from .normal_forms import (
    NormalForm,
    NormalFormReport,
    check_bcnf,
    check_3nf,
    check_2nf,
    is_in_bcnf,
    is_in_3nf,
    is_in_2nf,
    determine_normal_form,
)
from .decomposition import (
    SubSchema,
    decompose_to_bcnf,
    decompose_to_3nf,
    lost_dependencies,
    is_dependency_preserving,
    covers_schema,
)

__all__ = [
    "compute_attribute_closure",
    "compute_fd_set_closure",
    "implies",
    "minimal_cover",
    "merge_dependents",
    "reduce_determinants",
    "split_dependencies",
    "are_equivalent",
    "project_fd_set",
    "find_all_minimal_keys",
    "is_super_key",
    "is_minimal_key",
    "prime_attributes",
    "NormalForm",
    "NormalFormReport",
    "check_bcnf",
    "check_3nf",
    "check_2nf",
    "is_in_bcnf",
    "is_in_3nf",
    "is_in_2nf",
    "determine_normal_form",
    "SubSchema",
    "decompose_to_bcnf",
    "decompose_to_3nf",
    "lost_dependencies",
    "is_dependency_preserving",
    "covers_schema",
]
