"""
Build-wide properties shared by all later configuration logic.

The registry enforces a single value per property name: writing the same
value twice is harmless, writing a different one is a fatal configuration
error. Values are compared through ``str()``, so ``1`` and ``"1"`` count as
equal.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from ..validation import ConflictingPropertyError
from .matching import any_requested, is_requested
from .names import (
    ALL_VERSIONS_CROSS_VERSION_TEST,
    ALL_VERSIONS_INTEG_MULTI_VERSION_TEST,
    PLATFORM_TEST,
    SOAK_TEST,
    TEST_VERSIONS_PROPERTY,
)

logger = logging.getLogger(__name__)

ALL_TEST_VERSIONS_TASKS = (
    ALL_VERSIONS_CROSS_VERSION_TEST,
    ALL_VERSIONS_INTEG_MULTI_VERSION_TEST,
    SOAK_TEST,
)


class PropertyRegistry:
    """
    Key/value store for global build properties.

    Not thread-safe: all writes happen on the configuration thread.
    """

    def __init__(self):
        self._properties: Dict[str, Any] = {}

    def set(self, name: str, value: Any) -> None:
        """
        Set a property, failing if it already holds a different value.

        Raises:
            ConflictingPropertyError: If ``name`` is set to a value whose
                string form differs from ``value``'s
        """
        if name in self._properties:
            existing = self._properties[name]
            if str(value) != str(existing):
                raise ConflictingPropertyError(name, value, existing)
            logger.debug(f"Global property {name} already set to {existing}")
            return
        self._properties[name] = value
        logger.info(f"Global property {name} set to {value}")

    def get(self, name: str) -> Optional[Any]:
        return self._properties.get(name)

    def has(self, name: str) -> bool:
        return name in self._properties

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._properties)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._properties)


def needs_partial_test_versions(requested_tasks: Sequence[str]) -> bool:
    return is_requested(PLATFORM_TEST, requested_tasks)


def needs_all_test_versions(requested_tasks: Sequence[str]) -> bool:
    return any_requested(ALL_TEST_VERSIONS_TASKS, requested_tasks)


def setup_global_state(registry: PropertyRegistry, requested_tasks: Sequence[str]) -> None:
    """
    Stamp the ``testVersions`` property derived from the requested tasks.

    ``platformTest`` selects ``partial``; the all-versions and soak tasks
    select ``all``. Requesting both kinds raises ConflictingPropertyError.
    """
    if needs_partial_test_versions(requested_tasks):
        registry.set(TEST_VERSIONS_PROPERTY, "partial")
    if needs_all_test_versions(requested_tasks):
        registry.set(TEST_VERSIONS_PROPERTY, "all")
