"""
Unit tests for the CI diagnostic monitor.

Tests arming, firing, cancellation and the stack-trace dump action.
"""

import sys
import threading
import time
from datetime import timedelta
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from buildlifecycle.lifecycle.monitor import (
    DEFAULT_DUMPER_SCRIPT,
    DiagnosticMonitor,
    MonitorHandle,
    MonitorState,
    build_diagnostic_command,
    dump_stack_traces,
)
from buildlifecycle.models import LifecycleConfig

SHORT = timedelta(milliseconds=20)


@pytest.mark.unit
class TestMonitorHandle:
    """Test cases for MonitorHandle."""

    def test_fires_once_after_timeout(self):
        """Test that the action runs once after the timeout."""
        fired = threading.Event()
        action = Mock(side_effect=fired.set)

        handle = DiagnosticMonitor().arm(SHORT, action)

        assert fired.wait(timeout=5.0)
        handle.join(timeout=5.0)
        assert action.call_count == 1
        assert handle.state is MonitorState.FIRED

    def test_cancel_before_timeout_never_fires(self):
        """Test that cancelling before the timeout prevents the action."""
        action = Mock()

        handle = DiagnosticMonitor().arm(timedelta(milliseconds=100), action)
        assert handle.cancel() is True
        time.sleep(0.3)

        action.assert_not_called()
        assert handle.state is MonitorState.CANCELLED

    def test_cancel_is_idempotent(self):
        """Test that a second cancel is a no-op."""
        handle = DiagnosticMonitor().arm(timedelta(hours=1), Mock())

        assert handle.cancel() is True
        assert handle.cancel() is False
        assert handle.state is MonitorState.CANCELLED

    def test_cancel_after_fire_is_noop(self):
        """Test that cancelling a fired monitor is a no-op."""
        fired = threading.Event()
        handle = DiagnosticMonitor().arm(SHORT, fired.set)
        assert fired.wait(timeout=5.0)
        handle.join(timeout=5.0)

        assert handle.cancel() is False
        assert handle.state is MonitorState.FIRED

    def test_timer_thread_is_daemon(self):
        """Test that the timer thread does not block exit."""
        handle = MonitorHandle(timedelta(hours=1), Mock())
        assert handle._timer.daemon is True
        assert handle.is_armed

    def test_action_failure_is_logged_not_raised(self, caplog):
        """Test that a failing action is logged only."""
        action = Mock(side_effect=RuntimeError("dumper exploded"))

        handle = DiagnosticMonitor().arm(SHORT, action)
        handle.join(timeout=5.0)

        action.assert_called_once()
        assert handle.state is MonitorState.FIRED
        assert "dumper exploded" in caplog.text


@pytest.mark.unit
class TestDiagnosticMonitor:
    """Test cases for DiagnosticMonitor."""

    def test_cancel_delegates_to_handle(self):
        """Test DiagnosticMonitor.cancel on a handle, twice."""
        monitor = DiagnosticMonitor()
        handle = monitor.arm(timedelta(hours=1), Mock())

        monitor.cancel(handle)
        monitor.cancel(handle)

        assert handle.state is MonitorState.CANCELLED

    @patch("buildlifecycle.lifecycle.monitor.dump_stack_traces")
    def test_default_action_uses_config(self, mock_dump):
        """Test that the default action takes script and timeout from config."""
        config = LifecycleConfig(
            diagnostic_script=Path("/opt/dump.py"),
            diagnostic_process_timeout=42.0,
        )

        DiagnosticMonitor(config).default_action()()

        mock_dump.assert_called_once_with(Path("/opt/dump.py"), 42.0)

    @patch("buildlifecycle.lifecycle.monitor.run_command")
    def test_armed_default_action_runs_dumper(self, mock_run):
        """Test that an armed default monitor launches the dumper."""
        mock_run.return_value = (0, "PID 1: python", "")

        handle = DiagnosticMonitor().arm(SHORT)
        handle.join(timeout=5.0)

        mock_run.assert_called_once()
        command = mock_run.call_args[0][0]
        assert command == [sys.executable, str(DEFAULT_DUMPER_SCRIPT)]


@pytest.mark.unit
class TestStackTraceDumpAction:
    """Test cases for launching the stack-trace dumper."""

    def test_command_uses_current_interpreter(self):
        """Test the dumper command line uses sys.executable."""
        command = build_diagnostic_command()

        assert command[0] == sys.executable
        assert command[1].endswith("stack_traces.py")
        assert Path(command[1]).exists()

    def test_command_with_custom_script(self):
        """Test the dumper command line with a script override."""
        assert build_diagnostic_command(Path("/tmp/dump.py")) == [sys.executable, "/tmp/dump.py"]

    @patch("buildlifecycle.lifecycle.monitor.run_command")
    def test_dump_logs_output(self, mock_run, caplog):
        """Test that dumper output is logged."""
        mock_run.return_value = (0, "PID 7: python build.py", "")

        with caplog.at_level("INFO"):
            assert dump_stack_traces(process_timeout=5.0) == 0

        assert "PID 7: python build.py" in caplog.text
        assert mock_run.call_args[1]["timeout"] == 5.0

    @patch("buildlifecycle.lifecycle.monitor.run_command")
    def test_dump_failure_is_reported_not_raised(self, mock_run, caplog):
        """Test that a failed dumper run is reported as a return code."""
        mock_run.return_value = (-1, "", "Error: Command not found 'python'")

        assert dump_stack_traces() == -1
        assert "exited with code -1" in caplog.text

    def test_dump_with_missing_script_does_not_raise(self, temp_dir):
        """Test running a missing dumper script."""
        return_code = dump_stack_traces(temp_dir / "missing.py", process_timeout=30.0)

        assert return_code != 0
