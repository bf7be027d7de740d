"""Database row definitions."""

from dataclasses import dataclass


@dataclass
class DBWorkout:
    """Database representation of a workout."""

    id: str
    name: str
    exercises: str | None  # JSON string, see db.codec
