"""
Exception types and error handling helpers.

This module provides the exceptions raised while configuring the build
lifecycle, plus small helpers that log errors consistently before re-raising
or exiting.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when configuration validation fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class LifecycleError(Exception):
    """Base class for fatal lifecycle configuration errors."""


class ConflictingPropertyError(LifecycleError):
    """
    Raised when a global property is set to two different values.

    Values are compared by their string form, so ``1`` and ``"1"`` are
    considered equal.
    """

    def __init__(self, name: str, value: Any, existing_value: Any):
        super().__init__(
            f"Attempting to set global property {name} to two different values "
            f"({value} vs {existing_value})"
        )
        self.name = name
        self.value = value
        self.existing_value = existing_value


class DuplicateTaskError(LifecycleError):
    """Raised when a task name is registered twice on the same task graph."""

    def __init__(self, name: str):
        super().__init__(f"Cannot add task '{name}' as a task with that name already exists.")
        self.name = name


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)
    default_severity = ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR
    severity = kwargs.pop('severity', default_severity)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)
    sys.exit(exit_code)
