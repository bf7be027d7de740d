"""Database layer for gym-planner."""

from .codec import decode_exercises, encode_exercises
from .engine import SCHEMA_VERSION, get_db_path, init_db
from .live import ChangeNotifier, ExternalCommitPoller, LiveQuery, WorkoutLiveQueries
from .repositories import WorkoutRepository

__all__ = [
    "ChangeNotifier",
    "decode_exercises",
    "encode_exercises",
    "ExternalCommitPoller",
    "get_db_path",
    "init_db",
    "LiveQuery",
    "SCHEMA_VERSION",
    "WorkoutLiveQueries",
    "WorkoutRepository",
]
