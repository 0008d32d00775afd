"""
Command execution utilities.

This module provides functions for executing external commands with their
failures reported as return codes rather than exceptions.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


def run_command(
    command: List[str], cwd: Optional[Path] = None, timeout: Optional[float] = None
) -> Tuple[int, str, str]:
    """Execute a command and capture its output.

    Never raises for execution problems: a missing executable, a timeout or
    any other failure to run is logged and reported as return code -1.

    Args:
        command: The command and its arguments.
        cwd: Working directory for the command (default: current directory).
        timeout: Seconds to wait before killing the command, None to wait forever.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
    """
    logger.debug(f"Executing command: {command} in '{cwd or '.'}'")
    try:
        process = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {command[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{command[0]}'"
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {command[0]}")
        return -1, "", f"Error: Command timed out after {timeout}s"
    except Exception as e:
        logger.error(f"Unexpected error while running command {command[0]}: "
                     f"{type(e).__name__}: {e}", exc_info=True)
        return -1, "", f"An unexpected error occurred: {e}"

