"""
Validation and error handling for the buildlifecycle package.

This module provides input validation, the lifecycle exception types and
error handling helpers with consistent error reporting across the package.
"""

from .exceptions import (
    ConflictingPropertyError,
    DuplicateTaskError,
    ErrorSeverity,
    LifecycleError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .validators import (
    validate_non_empty_string,
    validate_positive_float,
    validate_string_list,
)

__all__ = [
    # Exceptions
    "ConflictingPropertyError",
    "DuplicateTaskError",
    "ErrorSeverity",
    "LifecycleError",
    "ValidationError",
    # Error handling
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Validators
    "validate_non_empty_string",
    "validate_positive_float",
    "validate_string_list",
]
