"""Text encoding of a workout's exercise list.

The exercise list is stored as a JSON array inside a single column of the
``workouts`` table. ``notes`` is always written, as ``null`` when absent, so
that a missing note and an empty note stay distinguishable.
"""

import json

from ..errors import CodecError
from ..models.workout import Exercise

_REQUIRED_FIELDS = ("id", "name", "sets", "reps")


def encode_exercises(exercises: list[Exercise]) -> str:
    """Encode an ordered exercise list to JSON text."""
    return json.dumps(
        [ex.to_dict() for ex in exercises],
        ensure_ascii=False,
        sort_keys=True,
    )


def decode_exercises(text: str | None) -> list[Exercise]:
    """Decode JSON text produced by encode_exercises.

    Missing or empty input decodes to an empty list. Anything else that is
    not a valid encoded list raises CodecError.
    """
    if not text:
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"Invalid exercise list JSON: {e}") from e

    if not isinstance(data, list):
        raise CodecError(f"Expected a JSON array, got {type(data).__name__}")

    return [_decode_exercise(item, index) for index, item in enumerate(data)]


def _decode_exercise(item, index: int) -> Exercise:
    """Validate and convert one decoded list entry."""
    if not isinstance(item, dict):
        raise CodecError(f"Exercise #{index} is not an object")

    for key in _REQUIRED_FIELDS:
        if not isinstance(item.get(key), str):
            raise CodecError(f"Exercise #{index} has missing or invalid '{key}'")

    notes = item.get("notes")
    if notes is not None and not isinstance(notes, str):
        raise CodecError(f"Exercise #{index} has invalid 'notes'")

    return Exercise.from_dict(item)
