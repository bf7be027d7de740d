"""Application settings loaded from environment variables.

Every setting can be overridden with a ``GYM_PLANNER_`` prefixed variable,
e.g. ``GYM_PLANNER_DATA_DIR=/tmp/gym``, or from a ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Runtime configuration for gym-planner."""

    model_config = SettingsConfigDict(
        env_prefix="GYM_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DATA_DIR
    db_filename: str = "gym_planner.db"
    log_level: str = "INFO"

    # Insert the example workouts when the store is empty on first start
    seed_examples: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename


@lru_cache
def get_settings() -> Settings:
    return Settings()
