"""
Lifecycle wiring for the CI pipeline.

- names: lifecycle task names and groups
- matching: requested-task matching, including qualified task paths
- environment: CI server detection
- properties: global build properties with conflict detection
- timeouts: timeout selection for the diagnostic monitor
- monitor: the one-shot stack-trace dump on timeout
- graph: lifecycle task tables and their registration
"""

from .environment import is_ci_server
from .graph import (
    EARLY_FEEDBACK_TASKS,
    PROMOTION_TASKS,
    LifecycleGraphBuilder,
    TaskGraph,
)
from .matching import any_requested, is_requested
from .monitor import (
    DiagnosticMonitor,
    MonitorHandle,
    MonitorState,
    build_diagnostic_command,
    dump_stack_traces,
)
from .properties import PropertyRegistry, setup_global_state
from .timeouts import compute_timeout

__all__ = [
    "is_ci_server",
    "EARLY_FEEDBACK_TASKS",
    "PROMOTION_TASKS",
    "LifecycleGraphBuilder",
    "TaskGraph",
    "any_requested",
    "is_requested",
    "DiagnosticMonitor",
    "MonitorHandle",
    "MonitorState",
    "build_diagnostic_command",
    "dump_stack_traces",
    "PropertyRegistry",
    "setup_global_state",
    "compute_timeout",
]
