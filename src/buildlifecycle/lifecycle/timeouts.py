"""
Timeout selection for the CI diagnostic monitor.
"""

from datetime import timedelta
from typing import Optional, Sequence

from ..models.config import LifecycleConfig
from .matching import any_requested


def compute_timeout(
    requested_tasks: Sequence[str],
    is_ci: bool,
    config: Optional[LifecycleConfig] = None,
) -> Optional[timedelta]:
    """
    Pick the timeout after which stack traces are dumped.

    Early-feedback builds (``compileAllBuild``, ``sanityCheck``, ``quickTest``)
    get 30 minutes; everything else gets 2 hours 45 minutes.

    Args:
        requested_tasks: Task names as given on the command line
        is_ci: Whether the build runs on a CI server
        config: Overrides for the short task set and both durations

    Returns:
        The timeout, or None outside CI where no monitor is armed
    """
    if not is_ci:
        return None
    if config is None:
        config = LifecycleConfig()
    if any_requested(config.short_tasks, requested_tasks):
        return config.short_timeout
    return config.default_timeout
