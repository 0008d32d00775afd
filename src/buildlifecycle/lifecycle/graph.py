"""
Lifecycle task registration.

The lifecycle tasks aggregate the real work of a build so a CI pipeline can
fan a long build out into several jobs keyed by task name. Task definitions
are kept as data and registered onto a ``TaskGraph``.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..models.tasks import LifecycleTask
from ..validation import DuplicateTaskError
from .names import (
    BUILD_GROUP,
    CI_GROUP,
    COMPILE_ALL_BUILD,
    PACKAGE_BUILD,
    SANITY_CHECK,
    VERIFICATION_GROUP,
)

logger = logging.getLogger(__name__)

EARLY_FEEDBACK_TASKS = (
    LifecycleTask.create(
        name=COMPILE_ALL_BUILD,
        description="Initialize CI Pipeline by priming the cache before fanning out",
        group=CI_GROUP,
        dependencies=[":base-services:createBuildReceipt"],
    ),
    LifecycleTask.create(
        name=SANITY_CHECK,
        description="Run all basic checks (without tests) - to be run locally and on CI for early feedback",
        group=VERIFICATION_GROUP,
        dependencies=[
            ":docs:checkstyleApi",
            ":internal-build-reports:allIncubationReportsZip",
            ":architecture-test:checkBinaryCompatibility",
            ":docs:javadocAll",
            ":architecture-test:test",
            ":tooling-api:toolingApiShadedJar",
        ],
    ),
)

# Called by the promotion build running on CI.
PROMOTION_TASKS = (
    LifecycleTask.create(
        name=PACKAGE_BUILD,
        description="Build production distros and smoke test them",
        group=BUILD_GROUP,
        dependencies=[
            ":distributions-full:verifyIsProductionBuildEnvironment",
            ":distributions-full:buildDists",
            ":distributions-integ-tests:forkingIntegTest",
            ":docs:releaseNotes",
            ":docs:incubationReport",
            ":docs:checkDeadInternalLinks",
        ],
    ),
)


class TaskGraph:
    """
    Registry of tasks by name.

    Only records registrations and rejects duplicate names; executing tasks is
    left to the build engine consuming the graph.
    """

    def __init__(self):
        self._tasks: Dict[str, LifecycleTask] = {}

    def register(self, task: LifecycleTask) -> LifecycleTask:
        """
        Raises:
            DuplicateTaskError: If a task with the same name is registered
        """
        if task.name in self._tasks:
            raise DuplicateTaskError(task.name)
        self._tasks[task.name] = task
        return task

    def get(self, name: str) -> Optional[LifecycleTask]:
        return self._tasks.get(name)

    def tasks_in_group(self, group: str) -> List[LifecycleTask]:
        return [task for task in self._tasks.values() if task.group == group]

    @property
    def names(self) -> List[str]:
        return list(self._tasks)

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[LifecycleTask]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)


class LifecycleGraphBuilder:
    """Registers the lifecycle task tables onto a task graph."""

    def __init__(self, graph: TaskGraph):
        self.graph = graph

    def register_task(self, name: str, description: str, group: str,
                      dependencies: Iterable[str] = ()) -> LifecycleTask:
        task = LifecycleTask.create(name, description, group, dependencies)
        self.graph.register(task)
        logger.debug(f"Registered task {name} ({group}) depending on {list(task.dependencies)}")
        return task

    def register_all(self, tasks: Sequence[LifecycleTask]) -> List[LifecycleTask]:
        return [
            self.register_task(task.name, task.description, task.group, task.dependencies)
            for task in tasks
        ]

    def register_early_feedback_tasks(self) -> List[LifecycleTask]:
        return self.register_all(EARLY_FEEDBACK_TASKS)

    def register_promotion_tasks(self) -> List[LifecycleTask]:
        return self.register_all(PROMOTION_TASKS)
