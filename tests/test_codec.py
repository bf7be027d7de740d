"""Tests for the exercise list encoding."""

import json

import pytest

from gym_planner.db.codec import decode_exercises, encode_exercises
from gym_planner.errors import CodecError
from gym_planner.models import Exercise


class TestRoundTrip:
    """Tests that decode reverses encode."""

    def test_empty_list(self):
        """Test an empty list."""
        assert decode_exercises(encode_exercises([])) == []

    def test_order_and_fields_preserved(self, sample_workout):
        """Test order, values and notes survive encoding."""
        decoded = decode_exercises(encode_exercises(sample_workout.exercises))
        assert decoded == sample_workout.exercises
        assert [ex.id for ex in decoded] == [ex.id for ex in sample_workout.exercises]

    def test_absent_notes_distinct_from_empty(self):
        """Test None notes and empty notes stay different."""
        exercises = [
            Exercise(name="A", sets="1", reps="1", notes=None),
            Exercise(name="B", sets="1", reps="1", notes=""),
        ]
        decoded = decode_exercises(encode_exercises(exercises))
        assert decoded[0].notes is None
        assert decoded[1].notes == ""

    def test_unicode(self):
        """Test non-ASCII names."""
        exercises = [Exercise(name="Crucifixo Inclinado – halteres", sets="3", reps="10-15")]
        encoded = encode_exercises(exercises)
        assert "Crucifixo" in encoded
        assert decode_exercises(encoded) == exercises

    def test_deterministic(self, sample_workout):
        """Test the same list always encodes to the same text."""
        assert encode_exercises(sample_workout.exercises) == encode_exercises(
            [ex.edited() for ex in sample_workout.exercises]
        )


class TestDecode:
    """Tests for decoding edge cases."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_input_is_empty(self, text):
        """Test null or empty input decodes to an empty list."""
        assert decode_exercises(text) == []

    def test_notes_key_missing(self):
        """Test an entry without a notes key decodes with no notes."""
        text = json.dumps([{"id": "1", "name": "Row", "sets": "3", "reps": "10"}])
        assert decode_exercises(text)[0].notes is None

    @pytest.mark.parametrize(
        "text",
        [
            "{not json",
            '{"id": "1"}',
            '"just a string"',
            "[1, 2]",
            '[{"id": "1", "name": "Row", "sets": "3"}]',
            '[{"id": "1", "name": "Row", "sets": 3, "reps": "10"}]',
            '[{"id": "1", "name": "Row", "sets": "3", "reps": "10", "notes": 5}]',
        ],
    )
    def test_malformed_input_raises(self, text):
        """Test corrupted text is an error, not an empty list."""
        with pytest.raises(CodecError):
            decode_exercises(text)
