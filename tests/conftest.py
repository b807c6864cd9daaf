"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prog_cli.storage import TaskStorage  # noqa: E402
from prog_cli.task import Task, WorkWeight  # noqa: E402


@pytest.fixture
def reference_time():
    """A fixed "now" for tests that need deterministic dates."""
    return datetime(2026, 1, 15, 9, 0, 0)


@pytest.fixture
def tasks_path(tmp_path):
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def storage(tasks_path):
    return TaskStorage(tasks_path)


@pytest.fixture
def make_task(reference_time):
    """Build a task due a number of days after the reference time."""
    def _make(name="task", days=1, weight=WorkWeight.MEDIUM):
        return Task(due_date=reference_time + timedelta(days=days), name=name, weight=weight)
    return _make
