"""
Data models for the lifecycle wiring.

Configuration Models:
- LifecycleConfig: CI detection, timeout and diagnostic settings

Task Models:
- LifecycleTask: an immutable registered lifecycle task
"""

from .config import DEFAULT_CI_ENV_VARS, DEFAULT_SHORT_TASKS, LifecycleConfig
from .tasks import LifecycleTask

__all__ = [
    "DEFAULT_CI_ENV_VARS",
    "DEFAULT_SHORT_TASKS",
    "LifecycleConfig",
    "LifecycleTask",
]
