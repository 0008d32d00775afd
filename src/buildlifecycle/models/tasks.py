"""
Task data models.

A ``LifecycleTask`` describes one registered lifecycle task: its name,
description, group and the task paths it depends on.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class LifecycleTask:
    """
    A named, grouped task with dependency references.

    Instances are immutable once created; dependencies are stored as a tuple
    in declaration order.
    """

    name: str
    description: str
    group: str
    dependencies: Tuple[str, ...] = ()

    @classmethod
    def create(cls, name: str, description: str, group: str,
               dependencies: Iterable[str] = ()) -> "LifecycleTask":
        return cls(name=name, description=description, group=group,
                   dependencies=tuple(dependencies))

    @property
    def dependency_set(self) -> frozenset:
        return frozenset(self.dependencies)
