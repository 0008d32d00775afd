"""
Unit tests for CI environment detection.
"""

import pytest

from buildlifecycle.lifecycle.environment import is_ci_server


@pytest.mark.unit
class TestIsCiServer:
    """Test cases for is_ci_server."""

    def test_ci_variable_present(self):
        """Test detection through the CI variable."""
        assert is_ci_server({"CI": "true"}) is True

    def test_empty_value_still_counts(self):
        """Test that an empty CI value still marks CI."""
        assert is_ci_server({"CI": ""}) is True

    def test_no_ci_variable(self):
        """Test a local environment."""
        assert is_ci_server({"HOME": "/root"}) is False

    def test_custom_variables(self):
        """Test detection through configured variables."""
        assert is_ci_server({"BUILD_ID": "42"}, ["TEAMCITY_VERSION", "BUILD_ID"]) is True
        assert is_ci_server({"CI": "true"}, ["BUILD_ID"]) is False

    def test_defaults_to_process_environment(self, monkeypatch):
        """Test detection from os.environ."""
        monkeypatch.setenv("CI", "1")
        assert is_ci_server() is True

        monkeypatch.delenv("CI")
        assert is_ci_server() is False
