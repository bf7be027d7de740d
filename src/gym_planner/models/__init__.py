"""Data models for gym-planner."""

from .workout import Exercise, Workout, example_workouts, new_id

__all__ = [
    "example_workouts",
    "Exercise",
    "new_id",
    "Workout",
]
