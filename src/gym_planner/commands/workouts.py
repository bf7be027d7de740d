"""Workout management commands."""

import click

from ..app import open_app
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    finish,
    format_table,
    require_text,
)


@click.group()
@click.pass_context
def workouts(ctx):
    """Manage workouts.

    Commands for listing, viewing, adding, renaming and deleting workouts.
    """
    ensure_initialized(ctx)


def workout_rows(all_workouts) -> list[list[str]]:
    return [
        [w.id, w.name[:40] + "..." if len(w.name) > 40 else w.name, str(len(w.exercises))]
        for w in all_workouts
    ]


@workouts.command(name="list")
@async_command
async def list_workouts():
    """List all workouts, sorted by name."""
    async with open_app() as app:
        all_workouts = await app.repository.list_all()

    if not all_workouts:
        echo_info("No workouts found. Add one with 'gym-planner workouts add'")
        return

    click.echo()
    click.echo(format_table(["ID", "Name", "Exercises"], workout_rows(all_workouts)))
    click.echo()
    click.echo(f"Total: {len(all_workouts)} workout(s)")


@workouts.command()
@click.argument("workout_id")
@click.pass_context
@async_command
async def show(ctx, workout_id: str):
    """Show a workout and its exercises."""
    async with open_app() as app:
        workout = await app.service.get_workout(workout_id)

    if workout is None:
        echo_error(f"Workout {workout_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Workout: {workout.name} (ID: {workout.id})")
    click.echo("=" * 60)

    if not workout.exercises:
        echo_info("No exercises yet. Add one with 'gym-planner exercises add'")
        return

    rows = [
        [str(i), ex.id, ex.name, ex.sets, ex.reps, ex.notes or ""]
        for i, ex in enumerate(workout.exercises, start=1)
    ]
    click.echo()
    click.echo(format_table(["#", "ID", "Name", "Sets", "Reps", "Notes"], rows))


@workouts.command()
@click.argument("name", callback=require_text)
@click.pass_context
@async_command
async def add(ctx, name: str):
    """Add an empty workout."""
    async with open_app() as app:
        workout_id = app.service.add_workout(name)
        await finish(ctx, app)

    echo_success(f"Workout '{name}' added (ID: {workout_id})")


@workouts.command()
@click.argument("workout_id")
@click.argument("name", callback=require_text)
@click.pass_context
@async_command
async def rename(ctx, workout_id: str, name: str):
    """Rename a workout."""
    async with open_app() as app:
        if await app.service.get_workout(workout_id) is None:
            echo_error(f"Workout {workout_id} not found")
            ctx.exit(1)
        app.service.rename_workout(workout_id, name)
        await finish(ctx, app)

    echo_success(f"Workout {workout_id} renamed to '{name}'")


@workouts.command()
@click.argument("workout_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: str, force: bool):
    """Delete a workout and all of its exercises."""
    async with open_app() as app:
        workout = await app.service.get_workout(workout_id)
        if workout is None:
            echo_error(f"Workout {workout_id} not found")
            ctx.exit(1)

        if not force:
            click.echo(f"Workout: {workout.name} ({len(workout.exercises)} exercise(s))")
            if not click.confirm("Are you sure you want to delete this workout?"):
                echo_info("Cancelled")
                return

        app.service.delete_workout(workout)
        await finish(ctx, app)

    echo_success(f"Workout {workout_id} deleted")
