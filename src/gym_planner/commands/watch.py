"""Live feed command."""

import click

from ..app import open_app
from .base import async_command, echo_info, ensure_initialized, format_table
from .workouts import workout_rows


@click.command()
@click.option("--workout", "-w", "workout_id", default=None, help="Watch a single workout")
@click.option(
    "--count", "-c", default=0, type=int, help="Stop after this many snapshots (0 = never)"
)
@click.option(
    "--interval",
    default=0.5,
    type=float,
    show_default=True,
    help="Seconds between checks for changes made by other processes",
)
@click.pass_context
@async_command
async def watch(ctx, workout_id: str | None, count: int, interval: float):
    """Print a new snapshot every time the stored workouts change.

    Run it in one terminal and change workouts from another.
    Press Ctrl+C to stop.
    """
    ensure_initialized(ctx)

    async with open_app() as app:
        feed = app.live.watch_by_id(workout_id) if workout_id else app.live.watch_all()
        seen = 0
        async with app.live.poll_external_commits(interval), feed:
            async for snapshot in feed:
                seen += 1
                click.echo(f"--- snapshot {seen} ---")
                if workout_id:
                    if snapshot is None:
                        echo_info(f"Workout {workout_id} does not exist")
                    else:
                        click.echo(snapshot.get_summary())
                else:
                    click.echo(format_table(["ID", "Name", "Exercises"], workout_rows(snapshot)))

                if count and seen >= count:
                    break
