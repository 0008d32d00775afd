"""
buildlifecycle: CI lifecycle wiring for a fanned-out build pipeline.

This package registers the CI lifecycle tasks onto a task graph, stamps the
global build properties implied by the requested tasks, and arms a timeout
monitor on CI that dumps the stack traces of running Python processes when a
build hangs.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Exceptions, input validation and error handling
- lifecycle: Task matching, properties, timeouts, monitor and task graph
- orchestration: The per-build configuration pass and finish event
- system: Command execution and process management
- diagnostics: The stack-trace dumper launched on timeout
- cli: Command-line interface

Usage:
    From command line:
        buildlifecycle sanityCheck --ci

    Programmatically:
        from buildlifecycle import BuildSession
        with BuildSession(["sanityCheck"]) as session:
            session.configure()
"""

from .config import get_config, clear_config_cache, set_config_path
from .orchestration import BuildSession
from .cli import main_cli

from .models import LifecycleConfig, LifecycleTask

from .lifecycle import (
    DiagnosticMonitor,
    LifecycleGraphBuilder,
    MonitorHandle,
    PropertyRegistry,
    TaskGraph,
    compute_timeout,
    is_ci_server,
    is_requested,
    setup_global_state,
)

from .validation import (
    ConflictingPropertyError,
    DuplicateTaskError,
    LifecycleError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "BuildSession",
    "main_cli",
    # Models
    "LifecycleConfig",
    "LifecycleTask",
    # Lifecycle
    "DiagnosticMonitor",
    "LifecycleGraphBuilder",
    "MonitorHandle",
    "PropertyRegistry",
    "TaskGraph",
    "compute_timeout",
    "is_ci_server",
    "is_requested",
    "setup_global_state",
    # Errors
    "ConflictingPropertyError",
    "DuplicateTaskError",
    "LifecycleError",
    "ValidationError",
]
