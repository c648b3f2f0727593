"""Runtime settings, read from the environment."""

import os
from dataclasses import dataclass

DEFAULT_DATABASE_URL = "sqlite:///othello.db"
# 1 MiB is plenty: a full game is at most 60 placements plus a handful of passes
DEFAULT_MAX_RECORD_BYTES = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    max_record_bytes: int = DEFAULT_MAX_RECORD_BYTES
    log_level: str = "INFO"
    db_echo: bool = False


def get_settings() -> Settings:
    """Build the settings from OTHELLO_* environment variables, falling back to the defaults."""
    return Settings(
        database_url=os.getenv("OTHELLO_DATABASE_URL", DEFAULT_DATABASE_URL),
        max_record_bytes=int(
            os.getenv("OTHELLO_MAX_RECORD_BYTES", str(DEFAULT_MAX_RECORD_BYTES))
        ),
        log_level=os.getenv("OTHELLO_LOG_LEVEL", "INFO").upper(),
        db_echo=os.getenv("OTHELLO_DB_ECHO", "").lower() in {"1", "true", "yes"},
    )
