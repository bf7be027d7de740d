"""Workout and exercise data models."""

from dataclasses import dataclass, field, replace
from uuid import uuid4


def new_id() -> str:
    """Generate a fresh random identifier (UUID4, canonical text form)."""
    return str(uuid4())


@dataclass
class Exercise:
    """A single movement prescription inside a workout."""

    name: str
    sets: str  # free-form, e.g. "4" or "3-4"
    reps: str  # free-form, e.g. "8-12"
    notes: str | None = None  # None when the user gave no notes
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            sets=data["sets"],
            reps=data["reps"],
            notes=data.get("notes"),
        )

    def edited(self, **changes) -> "Exercise":
        """Return a copy with the given fields changed and the same id."""
        changes.pop("id", None)
        return replace(self, **changes)


@dataclass
class Workout:
    """A named, ordered list of exercises."""

    name: str
    exercises: list[Exercise] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            exercises=[Exercise.from_dict(ex) for ex in data.get("exercises", [])],
        )

    def copy(self) -> "Workout":
        """Deep copy, so the caller can change the exercise list freely."""
        return Workout(
            id=self.id,
            name=self.name,
            exercises=[replace(ex) for ex in self.exercises],
        )

    def find_exercise(self, exercise_id: str) -> Exercise | None:
        """Get the first exercise with the given ID."""
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    def get_summary(self) -> str:
        """Generate a text summary of the workout."""
        summary = f"Workout: {self.name}\n"
        if not self.exercises:
            return summary + "  (no exercises)\n"

        for ex in self.exercises:
            summary += f"  - {ex.name}: {ex.sets}x{ex.reps}"
            if ex.notes:
                summary += f" ({ex.notes})"
            summary += "\n"
        return summary


# Example workouts inserted into an empty store on first start
def example_workouts() -> list[Workout]:
    """Build the example workouts used to seed a new store."""
    return [
        Workout(
            name="Treino A - Peito e Tríceps",
            exercises=[
                Exercise(name="Supino Reto", sets="4", reps="8-12"),
                Exercise(name="Crucifixo Inclinado", sets="3", reps="10-15"),
            ],
        ),
        Workout(name="Treino B - Costas e Bíceps"),
        Workout(name="Treino C - Pernas e Ombros"),
    ]
