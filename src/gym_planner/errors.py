"""Exception hierarchy for gym-planner."""


class GymPlannerError(Exception):
    """Base class for gym-planner errors."""

    pass


class CodecError(GymPlannerError):
    """Raised when an encoded exercise list cannot be decoded."""

    pass


# ------------------------- STORE -------------------------


class StoreError(GymPlannerError):
    """Generic persistence store error."""

    pass


class RecordIntegrityError(StoreError):
    """Raised when a stored workout record cannot be read back."""

    def __init__(self, workout_id: str, reason: str):
        self.workout_id = workout_id
        self.reason = reason
        super().__init__(f"Workout record {workout_id} is corrupted: {reason}")


# ------------------------- LIVE QUERIES -------------------------


class SubscriptionClosedError(GymPlannerError):
    """Raised when reading a snapshot from a closed subscription."""

    pass
