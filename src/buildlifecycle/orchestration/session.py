"""
Build session lifecycle.

A ``BuildSession`` performs the single configuration pass for one build and
owns the "build finished" event. Hooks registered with ``on_build_finished``
run exactly once when the session finishes, whether the build succeeded,
failed or raised, which guarantees the diagnostic monitor is cancelled on
every exit path.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..config import get_config
from ..lifecycle import (
    DiagnosticMonitor,
    LifecycleGraphBuilder,
    MonitorHandle,
    PropertyRegistry,
    TaskGraph,
    compute_timeout,
    is_ci_server,
    setup_global_state,
)
from ..models.config import LifecycleConfig

logger = logging.getLogger(__name__)


class BuildSession:
    """
    Configuration state and finish hooks for one build.

    Args:
        requested_tasks: Task names given on the command line
        is_ci: Force CI detection on or off; detected from the environment when None
        config: Lifecycle configuration (defaults to the global configuration)
        graph: Task graph receiving the lifecycle tasks
        properties: Registry receiving the global properties
        monitor: Monitor used to arm the timeout diagnostics
        environ: Environment used for CI detection (defaults to ``os.environ``)
    """

    def __init__(
        self,
        requested_tasks: Sequence[str],
        is_ci: Optional[bool] = None,
        config: Optional[LifecycleConfig] = None,
        graph: Optional[TaskGraph] = None,
        properties: Optional[PropertyRegistry] = None,
        monitor: Optional[DiagnosticMonitor] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.requested_tasks = tuple(requested_tasks)
        self.config = config or get_config()
        if is_ci is None:
            is_ci = is_ci_server(environ, self.config.ci_env_vars)
        self.is_ci = is_ci
        self.graph = graph if graph is not None else TaskGraph()
        self.properties = properties if properties is not None else PropertyRegistry()
        self.monitor = monitor or DiagnosticMonitor(self.config)
        self.monitor_handle: Optional[MonitorHandle] = None
        self._finished_hooks: List[Callable[[], None]] = []
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def on_build_finished(self, hook: Callable[[], None]) -> None:
        if self._finished:
            raise RuntimeError("Build session already finished")
        self._finished_hooks.append(hook)

    def configure(self) -> None:
        """
        Run the configuration pass: timeout monitor, global properties, then
        the promotion and early-feedback lifecycle tasks.

        Raises:
            ConflictingPropertyError: If the requested tasks imply two values
                for the same global property
            DuplicateTaskError: If a lifecycle task is already on the graph
        """
        self.setup_timeout_monitor()
        setup_global_state(self.properties, self.requested_tasks)
        builder = LifecycleGraphBuilder(self.graph)
        builder.register_promotion_tasks()
        builder.register_early_feedback_tasks()
        logger.info(f"Registered {len(self.graph)} lifecycle tasks")

    def setup_timeout_monitor(self) -> Optional[MonitorHandle]:
        """Arm the diagnostic monitor on CI, cancelling it when the build finishes."""
        if not self.is_ci:
            logger.debug("Not running on CI, diagnostic monitor not armed")
            return None
        if not self.config.diagnostics_enabled:
            logger.info("Diagnostic monitor disabled by configuration")
            return None

        timeout = compute_timeout(self.requested_tasks, self.is_ci, self.config)
        handle = self.monitor.arm(timeout)
        self.monitor_handle = handle
        self.on_build_finished(lambda: self.monitor.cancel(handle))
        return handle

    def finish(self, reraise: bool = True) -> None:
        """
        Fire the build-finished hooks. Later calls do nothing.

        Every hook runs even if an earlier one raises. The first error is
        re-raised afterwards unless ``reraise`` is False, in which case hook
        failures are only logged.
        """
        if self._finished:
            return
        self._finished = True

        first_error: Optional[BaseException] = None
        for hook in self._finished_hooks:
            try:
                hook()
            except Exception as e:
                logger.error(f"Build finished hook failed: {e}")
                if first_error is None:
                    first_error = e
        self._finished_hooks.clear()
        logger.debug("Build session finished")
        if first_error is not None and reraise:
            raise first_error

    def summary(self) -> Dict[str, Any]:
        timeout = self.monitor_handle.timeout if self.monitor_handle else None
        return {
            "requested_tasks": list(self.requested_tasks),
            "is_ci": self.is_ci,
            "tasks": [task.name for task in self.graph],
            "properties": self.properties.as_dict(),
            "monitor_timeout": timeout,
        }

    def __enter__(self) -> "BuildSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            logger.debug(f"Build session ending with {exc_type.__name__}")
        # A hook failure must not replace the exception already propagating
        self.finish(reraise=exc_type is None)
        return False
