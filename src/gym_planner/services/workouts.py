"""Mutation service: the single entry point for changing workouts.

Every operation reads the current record, changes a copy and writes the
whole workout back. The public methods only schedule that work on the
background runner and return immediately.

Two services sharing one repository do not coordinate: if both read the
same workout before either writes, the later write wins and the earlier
change is lost.
"""

import logging
from dataclasses import replace

from ..db.engine import init_db
from ..db.repositories import WorkoutRepository
from ..models.workout import Exercise, Workout, example_workouts
from .runner import BackgroundRunner

logger = logging.getLogger(__name__)

SEEDED_KEY = "seed_checked"


class WorkoutService:
    """Creates, edits and deletes workouts and their exercises."""

    def __init__(self, repository: WorkoutRepository, runner: BackgroundRunner | None = None):
        self.repository = repository
        self.runner = runner or BackgroundRunner()

    async def start(self, seed: bool = True) -> bool:
        """Initialize the store and seed it on its first start.

        The seed check runs once per database file: examples are inserted
        only if the store is empty at that point, and never again after,
        even if every workout is later deleted.
        Returns True if the example workouts were inserted.
        """
        await init_db(self.repository.db_path)
        if not seed or await self.repository.get_meta(SEEDED_KEY) is not None:
            return False

        seeded = await self.repository.count() == 0
        if seeded:
            for workout in example_workouts():
                await self.repository.insert_or_replace(workout)
            logger.info("Seeded empty store with example workouts")
        await self.repository.set_meta(SEEDED_KEY, "1")
        return seeded

    async def get_workout(self, workout_id: str) -> Workout | None:
        """Read a workout once (no subscription)."""
        return await self.repository.get_by_id(workout_id)

    async def join(self) -> None:
        """Wait for all submitted mutations to finish."""
        await self.runner.join()

    async def close(self) -> None:
        await self.runner.close()

    # ------------------------------------------------------------------
    # Submission (fire-and-forget)
    # ------------------------------------------------------------------

    def add_workout(self, name: str) -> str:
        """Create an empty workout. Returns the new workout's ID."""
        workout = Workout(name=name)
        self.runner.submit(
            f"add_workout({workout.id})", self.repository.insert_or_replace, workout
        )
        return workout.id

    def rename_workout(self, workout_id: str, name: str) -> None:
        self.runner.submit(
            f"rename_workout({workout_id})", self._rename_workout, workout_id, name
        )

    def add_exercise_to_workout(self, workout_id: str, exercise: Exercise) -> None:
        self.runner.submit(
            f"add_exercise({workout_id})", self._add_exercise, workout_id, exercise
        )

    def update_exercise_in_workout(
        self, workout_id: str, exercise_id: str, exercise: Exercise
    ) -> None:
        self.runner.submit(
            f"update_exercise({workout_id}, {exercise_id})",
            self._update_exercise,
            workout_id,
            exercise_id,
            exercise,
        )

    def delete_exercise_from_workout(self, workout_id: str, exercise_id: str) -> None:
        self.runner.submit(
            f"delete_exercise({workout_id}, {exercise_id})",
            self._delete_exercise,
            workout_id,
            exercise_id,
        )

    def delete_workout(self, workout: Workout) -> None:
        self.runner.submit(
            f"delete_workout({workout.id})", self.repository.delete, workout
        )

    # ------------------------------------------------------------------
    # Read-modify-write bodies
    # ------------------------------------------------------------------

    async def _load(self, workout_id: str, action: str) -> Workout | None:
        workout = await self.repository.get_by_id(workout_id)
        if workout is None:
            logger.info("Workout %s not found; %s skipped", workout_id, action)
            return None
        return workout.copy()

    async def _rename_workout(self, workout_id: str, name: str) -> None:
        workout = await self._load(workout_id, "rename")
        if workout is None:
            return
        workout.name = name
        await self.repository.update(workout)

    async def _add_exercise(self, workout_id: str, exercise: Exercise) -> None:
        workout = await self._load(workout_id, "add exercise")
        if workout is None:
            return
        if workout.find_exercise(exercise.id) is not None:
            logger.info(
                "Exercise %s already in workout %s; add skipped", exercise.id, workout_id
            )
            return
        workout.exercises.append(replace(exercise))
        await self.repository.update(workout)

    async def _update_exercise(
        self, workout_id: str, exercise_id: str, exercise: Exercise
    ) -> None:
        workout = await self._load(workout_id, "update exercise")
        if workout is None:
            return

        for index, current in enumerate(workout.exercises):
            if current.id == exercise_id:
                break
        else:
            logger.info(
                "Exercise %s not in workout %s; update skipped", exercise_id, workout_id
            )
            return

        if exercise.id != exercise_id:
            # Exercise IDs never change; keep the one being replaced
            logger.warning(
                "Replacement for exercise %s carries ID %s; keeping the original ID",
                exercise_id,
                exercise.id,
            )
        workout.exercises[index] = replace(exercise, id=exercise_id)
        await self.repository.update(workout)

    async def _delete_exercise(self, workout_id: str, exercise_id: str) -> None:
        workout = await self._load(workout_id, "delete exercise")
        if workout is None:
            return
        workout.exercises = [ex for ex in workout.exercises if ex.id != exercise_id]
        await self.repository.update(workout)
