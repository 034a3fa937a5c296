"""Settings for the Tech Dash MCP server, read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "requests.db"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str


def load_settings() -> Settings:
    """
    Load settings from environment variables.

    A ``.env`` file in the working directory is read first; variables already
    set in the environment take precedence over it.

    Variables:
        TECHDASH_DB_PATH: SQLite database file (default: requests.db)
        TECHDASH_LOG_LEVEL: Logging level name (default: INFO)
    """
    load_dotenv()
    return Settings(
        db_path=Path(os.environ.get("TECHDASH_DB_PATH", DEFAULT_DB_PATH)).expanduser(),
        log_level=os.environ.get("TECHDASH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
