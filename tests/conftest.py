"""
Pytest configuration and shared fixtures for the buildlifecycle test suite.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from buildlifecycle.config import clear_config_cache, manager  # noqa: E402
from buildlifecycle.lifecycle import PropertyRegistry, TaskGraph  # noqa: E402
from buildlifecycle.models import LifecycleConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_config_cache(monkeypatch):
    """Keep the configuration singleton and its path from leaking between tests."""
    monkeypatch.setattr(manager, "_CONFIG_FILE_PATH", manager._CONFIG_FILE_PATH)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def lifecycle_config():
    """Default lifecycle configuration."""
    return LifecycleConfig()


@pytest.fixture
def registry():
    return PropertyRegistry()


@pytest.fixture
def task_graph():
    return TaskGraph()


@pytest.fixture
def sample_config_data():
    """Raw ``[lifecycle]`` table as parsed from TOML."""
    return {
        "ci": {"env_vars": ["CI", "BUILD_ID"]},
        "timeouts": {
            "short_timeout_minutes": 20,
            "default_timeout_minutes": 120,
            "short_tasks": ["sanityCheck", "quickTest"],
        },
        "diagnostics": {
            "enabled": True,
            "script": "dump.py",
            "process_timeout_seconds": 60,
        },
    }


@pytest.fixture
def config_file(temp_dir):
    """Write a config.toml into a temporary directory and return its path."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(
        "[lifecycle.ci]\n"
        'env_vars = ["JENKINS_URL"]\n'
        "\n"
        "[lifecycle.timeouts]\n"
        "short_timeout_minutes = 15\n"
        "default_timeout_minutes = 90\n"
        "\n"
        "[lifecycle.diagnostics]\n"
        "enabled = false\n"
    )
    return config_path
