"""Data access layer for gym-planner."""

import logging
from pathlib import Path

import aiosqlite

from ..errors import CodecError, RecordIntegrityError, StoreError
from ..models.workout import Workout
from .codec import decode_exercises, encode_exercises
from .engine import get_db_path
from .live import ChangeNotifier
from .models import DBWorkout

logger = logging.getLogger(__name__)

_REPLACE_SQL = "INSERT OR REPLACE INTO workouts (id, name, exercises) VALUES (?, ?, ?)"


class WorkoutRepository:
    """Repository for workouts.

    Each workout is one row; its exercise list is stored encoded in the
    ``exercises`` column, so every write replaces the whole record.
    Writes hold ``notifier.lock`` from execute to publish, so they are
    serialized and every live feed snapshots the state of each commit.
    """

    def __init__(self, db_path: Path | None = None, notifier: ChangeNotifier | None = None):
        self.db_path = db_path or get_db_path()
        self.notifier = notifier or ChangeNotifier()

    async def insert_or_replace(self, workout: Workout) -> None:
        """Write the full workout, replacing any record with the same ID."""
        await self._write(_REPLACE_SQL, self._workout_params(workout))
        logger.debug("Stored workout %s (%d exercises)", workout.id, len(workout.exercises))

    async def update(self, workout: Workout) -> None:
        """Write back a changed workout (same full replacement as insert)."""
        await self._write(_REPLACE_SQL, self._workout_params(workout))
        logger.debug("Updated workout %s (%d exercises)", workout.id, len(workout.exercises))

    async def delete(self, workout: Workout) -> None:
        """Delete a workout and its exercises."""
        await self.delete_by_id(workout.id)

    async def delete_by_id(self, workout_id: str) -> None:
        """Delete a workout by ID. Unknown IDs are ignored."""
        rowcount = await self._write("DELETE FROM workouts WHERE id = ?", (workout_id,))
        logger.debug("Deleted workout %s (%d row(s))", workout_id, rowcount)

    async def get_by_id(self, workout_id: str) -> Workout | None:
        """Get a workout by ID."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT * FROM workouts WHERE id = ?", (workout_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to read workout {workout_id}: {e}") from e

        if row is None:
            return None
        return self._row_to_workout(row)

    async def list_all(self) -> list[Workout]:
        """List all workouts, sorted by name."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute("SELECT * FROM workouts ORDER BY name ASC")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to list workouts: {e}") from e

        return [self._row_to_workout(row) for row in rows]

    async def count(self) -> int:
        """Number of stored workouts."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute("SELECT COUNT(*) FROM workouts")
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to count workouts: {e}") from e

        return row[0]

    async def get_meta(self, key: str) -> str | None:
        """Get a store-level flag."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT value FROM store_meta WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to read store flag {key}: {e}") from e

        return row[0] if row else None

    async def set_meta(self, key: str, value: str) -> None:
        """Set a store-level flag. Not a workout commit, so nothing is published."""
        async with self.notifier.lock:
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    await db.execute(
                        "INSERT OR REPLACE INTO store_meta (key, value) VALUES (?, ?)",
                        (key, value),
                    )
                    await db.commit()
            except aiosqlite.Error as e:
                raise StoreError(f"Failed to write store flag {key}: {e}") from e

    async def _write(self, sql: str, params: tuple) -> int:
        """Run one write statement in its own transaction and publish it."""
        async with self.notifier.lock:
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    cursor = await db.execute(sql, params)
                    await db.commit()
                    rowcount = cursor.rowcount
            except aiosqlite.Error as e:
                raise StoreError(f"Write failed: {e}") from e

            # Inside the lock so subscribers see commits in commit order
            await self.notifier.publish()
            return rowcount

    def _workout_params(self, workout: Workout) -> tuple:
        return (workout.id, workout.name, encode_exercises(workout.exercises))

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        record = DBWorkout(id=row["id"], name=row["name"], exercises=row["exercises"])
        try:
            exercises = decode_exercises(record.exercises)
        except CodecError as e:
            raise RecordIntegrityError(record.id, str(e)) from e
        return Workout(id=record.id, name=record.name, exercises=exercises)
