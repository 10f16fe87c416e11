"""Application settings loaded from the environment."""

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Settings for fit-journey.

    Every field can be overridden with a ``FIT_JOURNEY_`` prefixed
    environment variable or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIT_JOURNEY_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = DATA_DIR
    log_level: str = "INFO"

    # IANA zone used to decide whether two workouts fall on the same day
    timezone: str = "UTC"

    default_user: str = "local"

    # Seconds a writer waits for the SQLite write lock
    db_timeout: float = 5.0

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
