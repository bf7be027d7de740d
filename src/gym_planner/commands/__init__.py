"""CLI commands for gym-planner."""

from .exercises import exercises
from .init import init
from .watch import watch
from .workouts import workouts

__all__ = [
    "exercises",
    "init",
    "watch",
    "workouts",
]
