"""
Configuration data models.

This module contains the configuration structure loaded from `config.toml`
that drives CI detection, timeout selection and the diagnostic monitor.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

DEFAULT_CI_ENV_VARS = ["CI"]
DEFAULT_SHORT_TASKS = ["compileAllBuild", "sanityCheck", "quickTest"]


@dataclass
class LifecycleConfig:
    """
    Configuration for the lifecycle wiring, loaded from `config.toml`.
    """

    # [lifecycle.ci]
    # Environment variables whose presence marks a CI server run.
    ci_env_vars: List[str] = field(default_factory=lambda: list(DEFAULT_CI_ENV_VARS))

    # [lifecycle.timeouts]
    short_timeout_minutes: float = 30.0
    default_timeout_minutes: float = 165.0
    # Tasks that only need the short timeout.
    short_tasks: List[str] = field(default_factory=lambda: list(DEFAULT_SHORT_TASKS))

    # [lifecycle.diagnostics]
    diagnostics_enabled: bool = True
    # Overrides the bundled stack-trace dumper script when set.
    diagnostic_script: Optional[Path] = None
    diagnostic_process_timeout: float = 300.0

    @property
    def short_timeout(self) -> timedelta:
        return timedelta(minutes=self.short_timeout_minutes)

    @property
    def default_timeout(self) -> timedelta:
        return timedelta(minutes=self.default_timeout_minutes)
