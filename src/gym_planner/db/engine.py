"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)

# Bump whenever the workouts table layout changes; older files are recreated
SCHEMA_VERSION = 2


def get_db_path(data_dir: Path | None = None, filename: str | None = None) -> Path:
    """Get the database file path, creating its directory."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / (filename or settings.db_filename)


async def _schema_version(db: aiosqlite.Connection) -> int:
    cursor = await db.execute("PRAGMA user_version")
    row = await cursor.fetchone()
    return row[0]


async def _has_workouts_table(db: aiosqlite.Connection) -> bool:
    cursor = await db.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'workouts'"
    )
    return await cursor.fetchone() is not None


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema.

    A file written with a different schema version is not migrated: its
    tables are dropped and created again.
    """
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        version = await _schema_version(db)
        if version != SCHEMA_VERSION and await _has_workouts_table(db):
            logger.warning(
                "Schema version %s does not match %s; recreating workouts table",
                version,
                SCHEMA_VERSION,
            )
            await db.execute("DROP TABLE workouts")
            await db.execute("DROP TABLE IF EXISTS store_meta")

        # One row per workout; exercises holds the encoded exercise list
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workouts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                exercises TEXT
            )
        """)

        # Store-level flags, e.g. whether the examples were ever inserted
        await db.execute("""
            CREATE TABLE IF NOT EXISTS store_meta (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workouts_name
            ON workouts(name)
        """)

        await db.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        await db.commit()

    logger.debug("Database initialized at %s", db_path)
