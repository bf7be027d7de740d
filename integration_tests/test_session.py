"""Integration tests for a full application session.

These run the real wiring from gym_planner.app against a database file:
bootstrap, live feeds and background mutations together.
"""

import pytest

from gym_planner.app import open_app
from gym_planner.config import Settings
from gym_planner.models import Exercise


class TestSessionIntegration:
    """End-to-end tests of one session."""

    @pytest.mark.asyncio
    async def test_seeded_session_flow(self, session_db_path):
        """Test seeding, editing and deleting as a front end would."""
        settings = Settings(data_dir=session_db_path.parent, db_filename=session_db_path.name)

        async with open_app(settings) as app:
            async with app.live.watch_all() as all_feed:
                workouts = await all_feed.next(timeout=1)
                assert [w.name for w in workouts] == [
                    "Treino A - Peito e Tríceps",
                    "Treino B - Costas e Bíceps",
                    "Treino C - Pernas e Ombros",
                ]

                chest = workouts[0]
                async with app.live.watch_by_id(chest.id) as detail_feed:
                    assert (await detail_feed.next(timeout=1)).exercises == chest.exercises

                    press = Exercise(name="Supino Inclinado", sets="3", reps="8-10", notes="halteres")
                    app.service.add_exercise_to_workout(chest.id, press)
                    detail = await detail_feed.next(timeout=1)
                    assert [ex.name for ex in detail.exercises] == [
                        "Supino Reto",
                        "Crucifixo Inclinado",
                        "Supino Inclinado",
                    ]

                    first = detail.exercises[0]
                    app.service.update_exercise_in_workout(
                        chest.id, first.id, first.edited(reps="6-8")
                    )
                    detail = await detail_feed.next(timeout=1)
                    assert detail.exercises[0].reps == "6-8"
                    assert detail.exercises[0].id == first.id

                    app.service.delete_workout(detail)
                    assert await detail_feed.next(timeout=1) is None

                # One snapshot per commit: add, update, delete
                snapshots = [await all_feed.next(timeout=1) for _ in range(3)]
                assert [len(s) for s in snapshots] == [3, 3, 2]

    @pytest.mark.asyncio
    async def test_data_survives_sessions(self, session_db_path):
        """Test a second session sees the first session's changes."""
        settings = Settings(
            data_dir=session_db_path.parent,
            db_filename=session_db_path.name,
            seed_examples=False,
        )

        async with open_app(settings) as app:
            workout_id = app.service.add_workout("Full Body")
            app.service.add_exercise_to_workout(
                workout_id, Exercise(name="Deadlift", sets="5", reps="5")
            )

        # Leaving the session drains pending work
        async with open_app(settings) as app:
            workout = await app.service.get_workout(workout_id)
            assert workout.name == "Full Body"
            assert [ex.name for ex in workout.exercises] == ["Deadlift"]
            assert await app.repository.count() == 1
