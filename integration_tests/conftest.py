"""Pytest configuration for integration tests."""

import tempfile
from pathlib import Path

import pytest


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def session_db_path():
    """Database file for a whole application session."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "session.db"
