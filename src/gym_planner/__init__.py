"""gym-planner: workout routine planner with a reactive local store."""

__version__ = "0.1.0"
