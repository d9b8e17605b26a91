"""Environment-driven settings for tillbook."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DB_PATH_ENV = "TILLBOOK_DB_PATH"
LOG_LEVEL_ENV = "TILLBOOK_LOG_LEVEL"
LOG_FILE_ENV = "TILLBOOK_LOG_FILE"

DEFAULT_DATA_DIR = Path.home() / ".tillbook"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Typed representation of the environment settings we care about."""

    database_path: Optional[str]
    log_level: str
    log_file: Optional[Path]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from environment variables.

        Unset or empty variables fall back to defaults. ``database_path`` stays
        None so the database factory can apply its own default location.
        """
        env = os.environ if environ is None else environ
        log_file = env.get(LOG_FILE_ENV) or None
        return cls(
            database_path=env.get(DB_PATH_ENV) or None,
            log_level=(env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
            log_file=Path(log_file) if log_file else None,
        )
