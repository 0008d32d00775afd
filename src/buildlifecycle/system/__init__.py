"""
System interaction utilities.

- Command execution with failures reported as return codes
- Build process execution and process tree termination
"""

from .commands import run_command
from .processes import run_build_process, terminate_process_tree

__all__ = [
    "run_command",
    "run_build_process",
    "terminate_process_tree",
]
