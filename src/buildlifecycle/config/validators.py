"""
Configuration validation utilities.

Turns the raw ``[lifecycle]`` table into a validated ``LifecycleConfig``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import DEFAULT_CI_ENV_VARS, DEFAULT_SHORT_TASKS, LifecycleConfig
from ..validation import (
    ValidationError,
    validate_non_empty_string,
    validate_positive_float,
    validate_string_list,
)

logger = logging.getLogger(__name__)


def _require_table(value: Any, field_name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(
            f"{field_name} must be a table, got {type(value).__name__}",
            field_name=field_name,
            value=value,
        )
    return value


def validate_lifecycle_config(lifecycle_data: Dict[str, Any],
                              config_dir: Optional[Path] = None) -> LifecycleConfig:
    """
    Validate and create a LifecycleConfig from raw configuration data.

    Args:
        lifecycle_data: Raw ``[lifecycle]`` table from TOML
        config_dir: Directory of the config file, used to resolve a relative
            diagnostic script path

    Returns:
        Validated LifecycleConfig instance

    Raises:
        ValidationError: If validation fails
    """
    lifecycle_data = _require_table(lifecycle_data, "lifecycle")
    ci_settings = _require_table(lifecycle_data.get("ci", {}), "lifecycle.ci")
    timeout_settings = _require_table(lifecycle_data.get("timeouts", {}), "lifecycle.timeouts")
    diagnostic_settings = _require_table(
        lifecycle_data.get("diagnostics", {}), "lifecycle.diagnostics"
    )

    ci_env_vars = validate_string_list(
        ci_settings.get("env_vars", DEFAULT_CI_ENV_VARS),
        field_name="lifecycle.ci.env_vars",
    )

    short_timeout_minutes = validate_positive_float(
        timeout_settings.get("short_timeout_minutes", 30),
        min_value=1.0,
        field_name="lifecycle.timeouts.short_timeout_minutes",
    )
    default_timeout_minutes = validate_positive_float(
        timeout_settings.get("default_timeout_minutes", 165),
        min_value=1.0,
        field_name="lifecycle.timeouts.default_timeout_minutes",
    )
    if short_timeout_minutes > default_timeout_minutes:
        logger.warning(
            f"Short timeout ({short_timeout_minutes}m) is longer than the default "
            f"timeout ({default_timeout_minutes}m)"
        )

    short_tasks = validate_string_list(
        timeout_settings.get("short_tasks", DEFAULT_SHORT_TASKS),
        field_name="lifecycle.timeouts.short_tasks",
        allow_empty=True,
    )

    diagnostics_enabled = diagnostic_settings.get("enabled", True)
    if not isinstance(diagnostics_enabled, bool):
        raise ValidationError(
            "lifecycle.diagnostics.enabled must be a boolean",
            field_name="lifecycle.diagnostics.enabled",
            value=diagnostics_enabled,
        )

    diagnostic_script = None
    raw_script = diagnostic_settings.get("script")
    if raw_script is not None:
        diagnostic_script = Path(validate_non_empty_string(
            raw_script, field_name="lifecycle.diagnostics.script"
        ))
        if not diagnostic_script.is_absolute() and config_dir is not None:
            diagnostic_script = config_dir / diagnostic_script

    diagnostic_process_timeout = validate_positive_float(
        diagnostic_settings.get("process_timeout_seconds", 300),
        min_value=1.0,
        field_name="lifecycle.diagnostics.process_timeout_seconds",
    )

    return LifecycleConfig(
        ci_env_vars=ci_env_vars,
        short_timeout_minutes=short_timeout_minutes,
        default_timeout_minutes=default_timeout_minutes,
        short_tasks=short_tasks,
        diagnostics_enabled=diagnostics_enabled,
        diagnostic_script=diagnostic_script,
        diagnostic_process_timeout=diagnostic_process_timeout,
    )
