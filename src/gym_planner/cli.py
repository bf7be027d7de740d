"""CLI entry point for gym-planner."""

import click

from . import __version__
from .commands import exercises, init, watch, workouts
from .config import get_settings
from .logging_setup import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gym-planner")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """gym-planner: plan workout routines from the command line.

    Workouts are named, ordered lists of exercises stored in a local
    SQLite database.

    Example usage:

        # Create the database (with a few example workouts)
        gym-planner init

        # Add a workout and an exercise
        gym-planner workouts add "Push Day"
        gym-planner exercises add <workout-id> -n "Bench Press" -s 4 -r 8-12

        # Follow changes live
        gym-planner watch
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)


# Register commands
main.add_command(init)
main.add_command(workouts)
main.add_command(exercises)
main.add_command(watch)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
