"""
Matching logical task names against the tasks requested on the command line.
"""

from typing import Iterable, Sequence


def is_requested(task_name: str, requested_tasks: Sequence[str]) -> bool:
    """
    Check whether a task was requested, directly or through a qualified path.

    ``sanityCheck`` matches both ``sanityCheck`` and ``:docs:sanityCheck``.
    Matching is case-sensitive and does not expand wildcards or abbreviations.

    Args:
        task_name: Logical task name to look for
        requested_tasks: Task names as given on the command line

    Returns:
        True if the task was requested
    """
    suffix = f":{task_name}"
    return any(
        requested == task_name or requested.endswith(suffix)
        for requested in requested_tasks
    )


def any_requested(task_names: Iterable[str], requested_tasks: Sequence[str]) -> bool:
    """Check whether at least one of ``task_names`` was requested."""
    return any(is_requested(name, requested_tasks) for name in task_names)
