"""Initialize project command."""

import click

from ..app import open_app
from ..config import get_settings
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the gym-planner database.

    Creates the data directory and the SQLite database, and adds a few
    example workouts the first time it is opened empty.
    """
    settings = get_settings()
    echo_info(f"Initializing gym-planner in {settings.data_dir}")

    async with open_app(settings) as app:
        count = await app.repository.count()

    echo_success(f"Database ready at {settings.db_path} ({count} workout(s))")
    click.echo()
    click.echo("Next steps:")
    click.echo("  gym-planner workouts list")
    click.echo('  gym-planner workouts add "Push Day"')
