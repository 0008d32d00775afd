"""
Print the stack traces of all running Python processes on this machine.

Launched by the CI diagnostic monitor when a build exceeds its timeout, to
help diagnose deadlocks. Stacks are read with ``py-spy dump`` when py-spy is
installed; otherwise only the process list is printed.

This file is executed directly by path, so it must not use package-relative
imports.

Usage:
    python stack_traces.py [--pid-timeout SECONDS]
"""

import argparse
import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Iterator, List, Optional

import psutil

logger = logging.getLogger(__name__)

PY_SPY_TIMEOUT = 60.0


def is_python_process(name: str, cmdline: List[str]) -> bool:
    if name.lower().startswith(("python", "pypy")):
        return True
    if cmdline:
        executable = Path(cmdline[0]).name.lower()
        return executable.startswith(("python", "pypy"))
    return False


def find_python_processes(exclude_pid: Optional[int] = None) -> Iterator[psutil.Process]:
    """Yield running Python processes, skipping ``exclude_pid``."""
    for proc in psutil.process_iter(["pid", "name", "cmdline"]):
        if proc.info["pid"] == exclude_pid:
            continue
        name = proc.info["name"] or ""
        cmdline = proc.info["cmdline"] or []
        if is_python_process(name, cmdline):
            yield proc


def describe_process(proc: psutil.Process) -> str:
    cmdline = " ".join(proc.info.get("cmdline") or []) or proc.info.get("name") or "?"
    return f"PID {proc.info['pid']}: {cmdline}"


def dump_process_stack(pid: int, py_spy: str, timeout: float = PY_SPY_TIMEOUT) -> str:
    """
    Return the ``py-spy dump`` output for ``pid``, or a one-line explanation
    when it could not be obtained.
    """
    try:
        result = subprocess.run(
            [py_spy, "dump", "--pid", str(pid)],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return f"py-spy timed out after {timeout}s"
    except OSError as e:
        return f"py-spy failed to start: {e}"
    if result.returncode != 0:
        return f"py-spy exited with code {result.returncode}: {result.stderr.strip()}"
    return result.stdout


def dump_all(pid_timeout: float = PY_SPY_TIMEOUT) -> int:
    """
    Log every Python process and its stack trace.

    Returns:
        Number of processes found
    """
    py_spy = shutil.which("py-spy")
    if py_spy is None:
        logger.warning("py-spy not found on PATH, listing processes without stack traces")

    count = 0
    for proc in find_python_processes(exclude_pid=os.getpid()):
        count += 1
        logger.info(describe_process(proc))
        if py_spy is not None:
            logger.info(dump_process_stack(proc.info["pid"], py_spy, pid_timeout))

    logger.info(f"Found {count} running Python processes")
    return count


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print stack traces of all running Python processes."
    )
    parser.add_argument(
        "--pid-timeout",
        type=float,
        default=PY_SPY_TIMEOUT,
        help=f"Seconds to wait for each py-spy dump (default: {PY_SPY_TIMEOUT}).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)
    dump_all(args.pid_timeout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
