"""
Unit tests for lifecycle task registration.
"""

import pytest

from buildlifecycle.lifecycle.graph import (
    EARLY_FEEDBACK_TASKS,
    PROMOTION_TASKS,
    LifecycleGraphBuilder,
    TaskGraph,
)
from buildlifecycle.models import LifecycleTask
from buildlifecycle.validation import DuplicateTaskError

SANITY_CHECK_DEPENDENCIES = {
    ":docs:checkstyleApi",
    ":internal-build-reports:allIncubationReportsZip",
    ":architecture-test:checkBinaryCompatibility",
    ":docs:javadocAll",
    ":architecture-test:test",
    ":tooling-api:toolingApiShadedJar",
}

PACKAGE_BUILD_DEPENDENCIES = {
    ":distributions-full:verifyIsProductionBuildEnvironment",
    ":distributions-full:buildDists",
    ":distributions-integ-tests:forkingIntegTest",
    ":docs:releaseNotes",
    ":docs:incubationReport",
    ":docs:checkDeadInternalLinks",
}


@pytest.mark.unit
class TestTaskGraph:
    """Test cases for TaskGraph."""

    def test_register_and_lookup(self, task_graph):
        """Test registering and looking up a task."""
        task = LifecycleTask.create("a", "A task", "build", [":x:y"])

        assert task_graph.register(task) is task
        assert task_graph.get("a") is task
        assert "a" in task_graph
        assert len(task_graph) == 1
        assert task_graph.names == ["a"]

    def test_duplicate_name_raises(self, task_graph):
        """Test DuplicateTaskError on a repeated name."""
        task_graph.register(LifecycleTask.create("a", "first", "build"))

        with pytest.raises(DuplicateTaskError) as exc_info:
            task_graph.register(LifecycleTask.create("a", "second", "verification"))

        assert exc_info.value.name == "a"
        assert task_graph.get("a").description == "first"

    def test_tasks_in_group(self, task_graph):
        """Test filtering tasks by group."""
        task_graph.register(LifecycleTask.create("a", "", "build"))
        task_graph.register(LifecycleTask.create("b", "", "verification"))

        assert [t.name for t in task_graph.tasks_in_group("build")] == ["a"]


@pytest.mark.unit
class TestLifecycleGraphBuilder:
    """Test cases for LifecycleGraphBuilder."""

    def test_register_task(self, task_graph):
        """Test registering a single task through the builder."""
        builder = LifecycleGraphBuilder(task_graph)

        task = builder.register_task("custom", "Custom task", "build", [":a:b", ":c:d"])

        assert task.dependencies == (":a:b", ":c:d")
        assert task_graph.get("custom") == task

    def test_early_feedback_tasks(self, task_graph):
        """Test the compileAllBuild and sanityCheck definitions."""
        LifecycleGraphBuilder(task_graph).register_early_feedback_tasks()

        compile_all = task_graph.get("compileAllBuild")
        assert compile_all.group == "CI Lifecycle"
        assert compile_all.dependencies == (":base-services:createBuildReceipt",)
        assert "priming the cache" in compile_all.description

        sanity_check = task_graph.get("sanityCheck")
        assert sanity_check.group == "verification"
        assert sanity_check.dependency_set == SANITY_CHECK_DEPENDENCIES
        assert len(sanity_check.dependencies) == 6

    def test_promotion_tasks(self, task_graph):
        """Test the packageBuild definition."""
        LifecycleGraphBuilder(task_graph).register_promotion_tasks()

        package_build = task_graph.get("packageBuild")
        assert package_build.group == "build"
        assert package_build.dependency_set == PACKAGE_BUILD_DEPENDENCIES
        assert package_build.description == "Build production distros and smoke test them"

    def test_registering_twice_raises(self, task_graph):
        """Test that registering a table twice fails."""
        builder = LifecycleGraphBuilder(task_graph)
        builder.register_promotion_tasks()

        with pytest.raises(DuplicateTaskError):
            builder.register_promotion_tasks()

    def test_tables_are_immutable(self):
        """Test that task tables cannot be modified."""
        task = EARLY_FEEDBACK_TASKS[0]
        with pytest.raises(AttributeError):
            task.name = "other"
        assert isinstance(PROMOTION_TASKS, tuple)
