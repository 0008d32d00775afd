"""
CI timeout monitor.

When a CI build runs longer than its timeout, the monitor launches the
stack-trace dumper so hung builds leave a trace of where every Python process
was stuck. The monitor is purely diagnostic: nothing it does can fail the
build.
"""

import logging
import sys
import threading
from datetime import timedelta
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional

from ..diagnostics import stack_traces
from ..models.config import LifecycleConfig
from ..system.commands import run_command
from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)

DEFAULT_DUMPER_SCRIPT = Path(stack_traces.__file__)


class MonitorState(Enum):
    ARMED = "armed"
    FIRED = "fired"
    CANCELLED = "cancelled"


class MonitorHandle:
    """
    Owns one scheduled diagnostic action.

    The action runs at most once, on a daemon timer thread, unless the handle
    is cancelled first. ``cancel`` is safe to call any number of times.
    """

    def __init__(self, timeout: timedelta, action: Callable[[], None],
                 name: str = "DiagnosticMonitor"):
        self.timeout = timeout
        self._action = action
        self._state = MonitorState.ARMED
        self._lock = threading.Lock()
        self._timer = threading.Timer(timeout.total_seconds(), self._fire)
        self._timer.daemon = True
        self._timer.name = name

    @property
    def state(self) -> MonitorState:
        with self._lock:
            return self._state

    @property
    def is_armed(self) -> bool:
        return self.state is MonitorState.ARMED

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> bool:
        """
        Cancel the pending action.

        Returns:
            True if this call cancelled it, False if it had already fired or
            been cancelled
        """
        with self._lock:
            if self._state is not MonitorState.ARMED:
                return False
            self._state = MonitorState.CANCELLED
        self._timer.cancel()
        logger.debug("Diagnostic monitor cancelled")
        return True

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the timer thread to end (after firing or cancellation)."""
        self._timer.join(timeout)

    def _fire(self) -> None:
        with self._lock:
            if self._state is not MonitorState.ARMED:
                return
            self._state = MonitorState.FIRED
        logger.warning(f"Build still running after {self.timeout}, running diagnostics")
        try:
            self._action()
        except Exception as e:
            handle_error(e, "diagnostic monitor action",
                         severity=ErrorSeverity.WARNING, reraise=False, logger=logger)


def build_diagnostic_command(script: Optional[Path] = None) -> List[str]:
    """
    Command line of the stack-trace dumper: the running interpreter executing
    the dumper script.
    """
    return [sys.executable, str(script or DEFAULT_DUMPER_SCRIPT)]


def dump_stack_traces(script: Optional[Path] = None,
                      process_timeout: Optional[float] = None) -> int:
    """
    Run the stack-trace dumper and log its output.

    Returns:
        The dumper's exit code, -1 if it could not be run
    """
    command = build_diagnostic_command(script)
    return_code, stdout, stderr = run_command(command, timeout=process_timeout)
    if stdout:
        logger.info(f"Stack trace dump:\n{stdout}")
    if return_code != 0:
        logger.warning(f"Stack trace dumper exited with code {return_code}: {stderr.strip()}")
    return return_code


class DiagnosticMonitor:
    """
    Arms and cancels timeout monitors.

    Args:
        config: Supplies the dumper script override and its process timeout
    """

    def __init__(self, config: Optional[LifecycleConfig] = None):
        self.config = config or LifecycleConfig()

    def default_action(self) -> Callable[[], int]:
        return partial(
            dump_stack_traces,
            self.config.diagnostic_script,
            self.config.diagnostic_process_timeout,
        )

    def arm(self, timeout: timedelta,
            action: Optional[Callable[[], None]] = None) -> MonitorHandle:
        """
        Schedule ``action`` (the stack-trace dump by default) after ``timeout``.
        """
        handle = MonitorHandle(timeout, action or self.default_action())
        handle.start()
        logger.info(f"Diagnostic monitor armed with a timeout of {timeout}")
        return handle

    def cancel(self, handle: MonitorHandle) -> None:
        handle.cancel()
