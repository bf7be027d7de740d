"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
import tempfile
from pathlib import Path

from gym_planner.config import get_settings
from gym_planner.db import WorkoutLiveQueries, WorkoutRepository, init_db
from gym_planner.models import Exercise, Workout
from gym_planner.services import BackgroundRunner, WorkoutService


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def data_dir(monkeypatch):
    """Point the settings at a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("GYM_PLANNER_DATA_DIR", tmpdir)
        get_settings.cache_clear()
        yield Path(tmpdir)
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def repository(temp_db_path):
    """An initialized, empty workout repository."""
    await init_db(temp_db_path)
    return WorkoutRepository(temp_db_path)


@pytest.fixture
def live(repository):
    return WorkoutLiveQueries(repository)


@pytest.fixture
def failures():
    """Collects operations reported to the runner's error callback."""
    return []


@pytest_asyncio.fixture
async def service(repository, failures):
    """A started mutation service without example data."""
    service = WorkoutService(repository, BackgroundRunner(on_error=failures.append))
    await service.start(seed=False)
    yield service
    await service.close()


@pytest.fixture
def sample_workout():
    """A workout with three exercises."""
    return Workout(
        name="Push Day",
        exercises=[
            Exercise(name="Bench Press", sets="4", reps="8-12"),
            Exercise(name="Overhead Press", sets="3", reps="6-8", notes="strict"),
            Exercise(name="Dips", sets="3", reps="AMRAP", notes=""),
        ],
    )
