"""Application wiring: one store, one live query layer, one mutation service."""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from .config import Settings, get_settings
from .db.engine import get_db_path
from .db.live import WorkoutLiveQueries
from .db.repositories import WorkoutRepository
from .services.runner import BackgroundRunner, FailedOperation
from .services.workouts import WorkoutService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Objects shared by everything running in one session."""

    settings: Settings
    repository: WorkoutRepository
    live: WorkoutLiveQueries
    service: WorkoutService


def create_context(
    settings: Settings | None = None,
    db_path: Path | None = None,
    on_error: Callable[[FailedOperation], None] | None = None,
) -> AppContext:
    """Build the session objects around a single repository."""
    settings = settings or get_settings()
    if db_path is None:
        db_path = get_db_path(settings.data_dir, settings.db_filename)

    repository = WorkoutRepository(db_path)
    runner = BackgroundRunner(on_error=on_error)
    return AppContext(
        settings=settings,
        repository=repository,
        live=WorkoutLiveQueries(repository),
        service=WorkoutService(repository, runner),
    )


@asynccontextmanager
async def open_app(
    settings: Settings | None = None,
    db_path: Path | None = None,
    on_error: Callable[[FailedOperation], None] | None = None,
) -> AsyncIterator[AppContext]:
    """Session lifespan: initialize and seed the store, drain work on exit."""
    context = create_context(settings, db_path, on_error=on_error)
    seeded = await context.service.start(seed=context.settings.seed_examples)
    if seeded:
        logger.info("Created example workouts in %s", context.repository.db_path)
    try:
        yield context
    finally:
        await context.service.close()
