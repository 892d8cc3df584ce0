"""Entry checks shared by the closure, key and decomposition algorithms.

Every public algorithm calls ``validate_inputs`` before doing any work, so an
empty schema or a dependency naming an undeclared attribute is reported
before a single closure pass runs.
"""

from typing import Iterable, List, Optional

from RELNORM.ir.models.attributes import AttributeSet
from RELNORM.ir.models.dependencies import FDSet
from RELNORM.utils.error_handling import ErrorContext, EmptySchema, UnknownAttribute
from RELNORM.utils.logging import get_logger

logger = get_logger(__name__)


def validate_schema(schema: AttributeSet, operation: str, relation_name: Optional[str] = None) -> None:
    """Raise EmptySchema if the schema has no attributes."""
    if not schema:
        raise EmptySchema(
            message="Schema has no attributes",
            context=ErrorContext(operation=operation, relation_name=relation_name),
        )


def validate_attributes(
    attributes: AttributeSet,
    schema: AttributeSet,
    operation: str,
    relation_name: Optional[str] = None,
) -> None:
    """Raise UnknownAttribute for the first attribute (in name order) missing from the schema."""
    for attr in attributes:
        if attr not in schema:
            raise UnknownAttribute(
                message=f"Attribute '{attr.name}' is not declared in schema {schema}",
                context=ErrorContext(
                    operation=operation,
                    relation_name=relation_name,
                    attribute_name=attr.name,
                ),
            )


def validate_dependencies(
    dependencies: FDSet,
    schema: AttributeSet,
    operation: str,
    relation_name: Optional[str] = None,
) -> None:
    """Raise UnknownAttribute for the first FD (in insertion order) referencing an undeclared attribute."""
    for fd in dependencies:
        for attr in fd.attributes():
            if attr not in schema:
                raise UnknownAttribute(
                    message=f"Dependency {fd} references '{attr.name}', which is not declared in schema {schema}",
                    context=ErrorContext(
                        operation=operation,
                        relation_name=relation_name,
                        attribute_name=attr.name,
                        dependency=str(fd),
                    ),
                )


def validate_inputs(
    schema: AttributeSet,
    dependencies: FDSet,
    operation: str,
    attributes: Iterable[AttributeSet] = (),
    relation_name: Optional[str] = None,
) -> None:
    """Run the empty-schema and unknown-attribute checks for one algorithm call."""
    validate_schema(schema, operation, relation_name)
    validate_dependencies(dependencies, schema, operation, relation_name)
    for attribute_set in attributes:
        validate_attributes(attribute_set, schema, operation, relation_name)


def find_schema_issues(schema: AttributeSet, dependencies: FDSet) -> List[str]:
    """
    Collect every schema/FD consistency problem without raising.

    Returns:
        List of issue messages (empty if all checks pass)
    """
    issues: List[str] = []
    if not schema:
        issues.append("Schema has no attributes")

    for fd in dependencies:
        missing = [a.name for a in fd.attributes() if a not in schema]
        if missing:
            issues.append(f"Dependency {fd} references undeclared attribute(s): {', '.join(missing)}")
        if fd.is_trivial():
            issues.append(f"Dependency {fd} is trivial and contributes nothing")

    if issues:
        logger.debug(f"Schema validation found {len(issues)} issue(s)")
    return issues
