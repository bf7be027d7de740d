"""Exercise management commands."""

import click

from ..app import open_app
from ..models.workout import Exercise
from .base import (
    async_command,
    echo_error,
    echo_success,
    ensure_initialized,
    finish,
    optional_notes,
    require_text,
)


@click.group()
@click.pass_context
def exercises(ctx):
    """Manage the exercises of a workout."""
    ensure_initialized(ctx)


@exercises.command()
@click.argument("workout_id")
@click.option("--name", "-n", required=True, callback=require_text, help="Exercise name")
@click.option("--sets", "-s", required=True, callback=require_text, help='Sets, e.g. "4"')
@click.option("--reps", "-r", required=True, callback=require_text, help='Reps, e.g. "8-12"')
@click.option("--notes", default=None, callback=optional_notes, help="Optional notes")
@click.pass_context
@async_command
async def add(ctx, workout_id: str, name: str, sets: str, reps: str, notes: str | None):
    """Append an exercise to a workout."""
    exercise = Exercise(name=name, sets=sets, reps=reps, notes=notes)
    async with open_app() as app:
        if await app.service.get_workout(workout_id) is None:
            echo_error(f"Workout {workout_id} not found")
            ctx.exit(1)
        app.service.add_exercise_to_workout(workout_id, exercise)
        await finish(ctx, app)

    echo_success(f"Exercise '{name}' added (ID: {exercise.id})")


@exercises.command()
@click.argument("workout_id")
@click.argument("exercise_id")
@click.option("--name", "-n", default=None, callback=require_text, help="New name")
@click.option("--sets", "-s", default=None, callback=require_text, help="New sets")
@click.option("--reps", "-r", default=None, callback=require_text, help="New reps")
@click.option("--notes", default=None, help='New notes ("" clears them)')
@click.pass_context
@async_command
async def edit(
    ctx,
    workout_id: str,
    exercise_id: str,
    name: str | None,
    sets: str | None,
    reps: str | None,
    notes: str | None,
):
    """Edit an exercise in place."""
    changes = {
        key: value
        for key, value in (("name", name), ("sets", sets), ("reps", reps))
        if value is not None
    }
    if notes is not None:
        changes["notes"] = notes.strip() or None

    async with open_app() as app:
        workout = await app.service.get_workout(workout_id)
        existing = workout.find_exercise(exercise_id) if workout else None
        if existing is None:
            echo_error(f"Exercise {exercise_id} not found in workout {workout_id}")
            ctx.exit(1)

        app.service.update_exercise_in_workout(
            workout_id, exercise_id, existing.edited(**changes)
        )
        await finish(ctx, app)

    echo_success(f"Exercise {exercise_id} updated")


@exercises.command()
@click.argument("workout_id")
@click.argument("exercise_id")
@click.pass_context
@async_command
async def remove(ctx, workout_id: str, exercise_id: str):
    """Remove an exercise from a workout."""
    async with open_app() as app:
        workout = await app.service.get_workout(workout_id)
        if workout is None or workout.find_exercise(exercise_id) is None:
            echo_error(f"Exercise {exercise_id} not found in workout {workout_id}")
            ctx.exit(1)
        app.service.delete_exercise_from_workout(workout_id, exercise_id)
        await finish(ctx, app)

    echo_success(f"Exercise {exercise_id} removed")
