"""Standardized error handling for RELNORM operations.

Every error raised by the normalization algorithms is a ``NormalizationError``
carrying an ``ErrorContext`` that names the operation and the offending
attribute or dependency, so callers can surface it as a rejected request.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
import traceback

from RELNORM.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """Context information for error handling."""
    operation: str
    relation_name: Optional[str] = None
    attribute_name: Optional[str] = None
    dependency: Optional[str] = None
    additional_context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class NormalizationError(Exception):
    """Base error for normalization failures."""
    message: str
    context: ErrorContext
    original_exception: Optional[Exception] = None
    error_type: str = "normalization_error"

    def __str__(self) -> str:
        return f"[{self.context.operation}] {self.message}"


@dataclass
class UnknownAttribute(NormalizationError):
    """An FD or attribute set names an attribute the governing schema does not declare."""
    error_type: str = "unknown_attribute"


@dataclass
class EmptySchema(NormalizationError):
    """A closure, key or decomposition request was made against a schema with no attributes."""
    error_type: str = "empty_schema"


@dataclass
class InvalidType(NormalizationError):
    """A declared type name is not a recognised SQL type (raised only in strict mode)."""
    error_type: str = "invalid_type"


@dataclass
class DuplicateAttribute(NormalizationError):
    """Two attributes of one schema share an identifier."""
    error_type: str = "duplicate_attribute"


@dataclass
class MalformedDependency(NormalizationError):
    """A dependency could not be parsed or names an empty attribute."""
    error_type: str = "malformed_dependency"


@dataclass
class SearchSpaceTooLarge(NormalizationError):
    """An exhaustive subset enumeration exceeds the configured attribute limit."""
    error_type: str = "search_space_too_large"


def log_error_with_context(
    error: Exception,
    context: ErrorContext,
    level: str = "error"
) -> None:
    """
    Log error with full context information.

    Args:
        error: The exception that occurred
        context: Error context information
        level: Log level ("error", "warning", "critical")
    """
    log_msg_parts = [f"Error in {context.operation}"]

    if context.relation_name:
        log_msg_parts.append(f"Relation: {context.relation_name}")
    if context.attribute_name:
        log_msg_parts.append(f"Attribute: {context.attribute_name}")
    if context.dependency:
        log_msg_parts.append(f"Dependency: {context.dependency}")

    log_msg = " | ".join(log_msg_parts)

    if level == "critical":
        logger.critical(f"{log_msg}: {error}", exc_info=True)
    elif level == "warning":
        logger.warning(f"{log_msg}: {error}", exc_info=True)
    else:
        logger.error(f"{log_msg}: {error}", exc_info=True)

    if context.additional_context:
        logger.debug(f"Additional context: {context.additional_context}")


def create_error_response(
    error: Exception,
    context: ErrorContext,
    include_traceback: bool = False
) -> Dict[str, Any]:
    """
    Create a rejected-request response for an external caller.

    Args:
        error: The exception that occurred
        context: Error context information
        include_traceback: If True, attach a truncated traceback

    Returns:
        Dictionary with error information
    """
    error_response: Dict[str, Any] = {
        "success": False,
        "error": {
            "type": type(error).__name__,
            "error_type": getattr(error, "error_type", "unexpected_error"),
            "message": getattr(error, "message", str(error)),
            "operation": context.operation,
            "timestamp": datetime.now().isoformat(),
        }
    }

    if context.relation_name:
        error_response["error"]["relation_name"] = context.relation_name
    if context.attribute_name:
        error_response["error"]["attribute_name"] = context.attribute_name
    if context.dependency:
        error_response["error"]["dependency"] = context.dependency

    if include_traceback and error.__traceback__ is not None:
        tb_str = "".join(traceback.format_tb(error.__traceback__))
        error_response["error"]["traceback"] = tb_str[-500:] if len(tb_str) > 500 else tb_str

    if context.additional_context:
        error_response["error"]["additional_context"] = context.additional_context

    return error_response


def handle_normalization_error(
    error: Exception,
    context: ErrorContext,
    log_level: str = "error",
    reraise: bool = False
) -> Optional[Dict[str, Any]]:
    """
    Log an error and build the rejected-request response for it.

    Args:
        error: The exception that occurred
        context: Error context; for a NormalizationError its own context fills in
            the attribute/dependency fields the caller did not know about
        log_level: Log level ("error", "warning", "critical")
        reraise: If True, re-raise after handling

    Returns:
        Error response dictionary

    Raises:
        NormalizationError: If reraise=True (non-normalization errors are wrapped)
    """
    if isinstance(error, NormalizationError):
        context = ErrorContext(
            operation=context.operation,
            relation_name=context.relation_name or error.context.relation_name,
            attribute_name=context.attribute_name or error.context.attribute_name,
            dependency=context.dependency or error.context.dependency,
            additional_context={**error.context.additional_context, **context.additional_context},
        )

    log_error_with_context(error, context, level=log_level)
    error_response = create_error_response(error, context)

    if reraise:
        if isinstance(error, NormalizationError):
            raise error
        raise NormalizationError(
            message=str(error),
            context=context,
            original_exception=error,
            error_type=type(error).__name__,
        ) from error

    return error_response
