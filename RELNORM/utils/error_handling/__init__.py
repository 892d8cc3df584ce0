"""Standardized error handling utilities.

Provides the error kinds raised by the normalization algorithms and the
helpers used to log them and turn them into rejected-request responses.
"""

from .handlers import (
    ErrorContext,
    NormalizationError,
    UnknownAttribute,
    EmptySchema,
    InvalidType,
    DuplicateAttribute,
    MalformedDependency,
    SearchSpaceTooLarge,
    handle_normalization_error,
    log_error_with_context,
    create_error_response,
)

__all__ = [
    "ErrorContext",
    "NormalizationError",
    "UnknownAttribute",
    "EmptySchema",
    "InvalidType",
    "DuplicateAttribute",
    "MalformedDependency",
    "SearchSpaceTooLarge",
    "handle_normalization_error",
    "log_error_with_context",
    "create_error_response",
]
