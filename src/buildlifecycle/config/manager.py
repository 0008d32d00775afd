"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import LifecycleConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config
from .validators import validate_lifecycle_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[LifecycleConfig] = None

# Default path to the configuration file, relative to this module's location.
# Overridden by the CLI's --config option and by tests.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to the config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> LifecycleConfig:
    """
    Load and validate the configuration file.

    A missing file is not an error: the built-in defaults match the
    pipeline's standard settings.

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using defaults")
        return LifecycleConfig()

    try:
        lifecycle_data = load_main_config(config_path)
        config = validate_lifecycle_config(lifecycle_data, config_dir=config_path.parent)
        logger.info(
            f"Successfully loaded configuration with {len(config.short_tasks)} short tasks "
            f"and CI flags {config.ci_env_vars}"
        )
        return config
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> LifecycleConfig:
    """
    Get the global configuration, loading it on first access.

    Returns:
        The singleton LifecycleConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "ci_env_vars": list(_CONFIG.ci_env_vars) if _CONFIG else [],
        "short_tasks_count": len(_CONFIG.short_tasks) if _CONFIG else 0,
    }
