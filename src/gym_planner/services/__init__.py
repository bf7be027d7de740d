"""Services for gym-planner."""

from .runner import BackgroundRunner, FailedOperation
from .workouts import WorkoutService

__all__ = [
    "BackgroundRunner",
    "FailedOperation",
    "WorkoutService",
]
