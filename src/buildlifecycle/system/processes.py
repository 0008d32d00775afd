"""
Build process execution and termination.

Runs the guarded build command and tears down its process tree when the
build is interrupted.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

import psutil

logger = logging.getLogger(__name__)

TERMINATION_GRACEFUL_TIMEOUT = 3.0
TERMINATION_FORCE_TIMEOUT = 2.0


def run_build_process(command: str, cwd: Optional[Path] = None) -> int:
    """
    Run a build command in a shell and wait for it to finish.

    Output goes straight to the inherited stdout/stderr. On KeyboardInterrupt
    the whole process tree is terminated before the interrupt propagates.

    Args:
        command: Shell command line to run
        cwd: Working directory for the build

    Returns:
        The build's exit code
    """
    logger.info(f"Starting build command: {command}")
    build_process = subprocess.Popen(command, cwd=cwd, shell=True)
    logger.info(f"Build process started with PID: {build_process.pid}")

    try:
        exit_code = build_process.wait()
    except KeyboardInterrupt:
        logger.warning("Interrupted. Terminating build process...")
        terminate_process_tree(build_process.pid, "build process")
        build_process.wait()
        raise

    logger.info(f"Build process finished with exit code: {exit_code}")
    return exit_code


def terminate_process_tree(pid: int, name: str) -> None:
    """
    Terminate a process and all of its children.

    Sends SIGTERM first and escalates to SIGKILL for anything still alive
    after ``TERMINATION_GRACEFUL_TIMEOUT`` seconds.
    """
    if pid <= 0:
        logger.warning(f"Invalid PID {pid} for {name}, skipping termination")
        return

    try:
        parent = psutil.Process(pid)
        processes = [parent] + parent.children(recursive=True)
    except psutil.NoSuchProcess:
        logger.info(f"Process {name} (PID: {pid}) already terminated")
        return

    logger.info(f"Terminating {name} (PID: {pid}) and {len(processes) - 1} children")

    for process in processes:
        try:
            process.terminate()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGTERM to PID {process.pid}")

    _, still_alive = psutil.wait_procs(processes, timeout=TERMINATION_GRACEFUL_TIMEOUT)
    if not still_alive:
        return

    logger.warning(f"{len(still_alive)} processes still alive, sending SIGKILL")
    for process in still_alive:
        try:
            process.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGKILL to PID {process.pid}")

    _, stubborn = psutil.wait_procs(still_alive, timeout=TERMINATION_FORCE_TIMEOUT)
    _log_stubborn_processes(stubborn, name)


def _log_stubborn_processes(processes: List[psutil.Process], name: str) -> None:
    if not processes:
        return
    logger.error(f"Failed to terminate {len(processes)} stubborn processes for {name}")
    for process in processes:
        try:
            logger.error(f"Stubborn process: PID {process.pid}, name: {process.name()}")
        except psutil.Error as e:
            logger.error(f"Could not get info for stubborn process PID {process.pid}: {e}")
