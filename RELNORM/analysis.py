"""Relation analysis: keys, normal form, violations and BCNF decomposition.

Dict-in/dict-out entry point for external callers (CLI, services). Inputs are
validated into the IR models; any NormalizationError comes back as a
rejected-request response naming the offending attribute or dependency.
"""

import json
from typing import Any, Dict, List, Union

from RELNORM.fd.decomposition import decompose_to_bcnf, lost_dependencies
from RELNORM.fd.keys import find_all_minimal_keys
from RELNORM.fd.normal_forms import check_3nf, check_bcnf, determine_normal_form
from RELNORM.ir.models.attributes import Attribute, AttributeSet, Schema
from RELNORM.ir.models.dependencies import FDSet
from RELNORM.ir.models.relation import Relation
from RELNORM.utils.error_handling import (
    ErrorContext,
    NormalizationError,
    handle_normalization_error,
)
from RELNORM.utils.logging import get_logger

logger = get_logger(__name__)


def _to_attribute(entry: Union[str, Dict[str, Any]]) -> Attribute:
    if isinstance(entry, dict):
        return Attribute(entry.get("name", ""), entry.get("type"))
    if not isinstance(entry, str):
        raise TypeError(f"attribute entry must be a string or a dict, got {type(entry).__name__}")
    return Attribute.parse(entry)


def _names(attributes: AttributeSet) -> List[str]:
    return list(attributes.names())


def _fd_dict(fd) -> Dict[str, List[str]]:
    return {"lhs": _names(fd.determinant), "rhs": _names(fd.dependent)}


def analyze_relation(
    relation_name: str,
    attributes: List[Union[str, Dict[str, Any]]],
    functional_dependencies: List[Union[str, Dict[str, Any]]],
    decompose: bool = True,
) -> Dict[str, Any]:
    """
    Analyze one relation's normalization properties.

    Args:
        relation_name: Name of the relation
        attributes: ``"name"`` / ``"name:TYPE"`` strings or ``{"name", "type"}`` dicts
        functional_dependencies: ``{"lhs": [...], "rhs": [...]}`` dicts or ``"A -> B"`` strings
        decompose: Whether to include the BCNF decomposition

    Returns:
        dict: ``success`` plus keys, prime attributes, normal form, violations
        and (optionally) the BCNF decomposition; on failure, the error response

    Example:
        >>> result = analyze_relation("R", ["A", "B", "C"], ["A -> B", "B -> C"])
        >>> result["normal_form"]
        '2NF'
    """
    logger.info(f"Analyzing relation {relation_name}")
    context = ErrorContext(operation="analyze_relation", relation_name=relation_name)

    try:
        relation = Relation(
            relation_name,
            Schema([_to_attribute(entry) for entry in attributes]),
            FDSet(functional_dependencies),
        )
        schema, dependencies = relation.schema, relation.dependencies

        keys = find_all_minimal_keys(schema, dependencies)
        bcnf_report = check_bcnf(schema, dependencies)
        third_report = check_3nf(schema, dependencies)

        result: Dict[str, Any] = {
            "success": True,
            "relation": relation.name,
            "attributes": [str(a) for a in schema],
            "keys": [_names(key) for key in keys],
            "prime_attributes": sorted({a.name for key in keys for a in key}),
            "normal_form": determine_normal_form(schema, dependencies).value,
            "bcnf_violations": [_fd_dict(fd) for fd in bcnf_report.violations],
            "3nf_violations": [_fd_dict(fd) for fd in third_report.violations],
        }

        if decompose:
            parts = decompose_to_bcnf(schema, dependencies)
            lost = lost_dependencies(dependencies, parts)
            result["bcnf_decomposition"] = [
                {
                    "attributes": _names(part.schema),
                    "functional_dependencies": [_fd_dict(fd) for fd in part.dependencies],
                }
                for part in parts
            ]
            result["dependency_preserving"] = not lost
            result["lost_dependencies"] = [_fd_dict(fd) for fd in lost]

    except NormalizationError as e:
        return handle_normalization_error(e, context, log_level="warning")
    except (ValueError, TypeError) as e:
        # pydantic rejects empty names; non-string entries raise TypeError
        return handle_normalization_error(e, context, log_level="warning")

    logger.debug(json.dumps(result, indent=2, default=str))
    return result
