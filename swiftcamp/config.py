"""
Configuration for SwiftCamp.

Settings come from environment variables, optionally loaded from a
.env file:

  SWIFTCAMP_CONTENT_PATH     lesson document (default: bundled lessons.yaml)
  SWIFTCAMP_PROGRESS_DB      progress database (default: ~/.swiftcamp/progress.db)
  SWIFTCAMP_EXECUTION_DELAY  seconds a simulated run pauses (default: 0)
  SWIFTCAMP_LOG_LEVEL        logging level (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from swiftcamp.classroom import DEFAULT_PROGRESS_DB


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    content_path: Optional[Path] = None
    progress_db: Path = DEFAULT_PROGRESS_DB
    execution_delay: float = 0.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Build settings from the environment (after loading .env)."""
        load_dotenv(env_file)

        content_path = os.environ.get("SWIFTCAMP_CONTENT_PATH")
        progress_db = os.environ.get("SWIFTCAMP_PROGRESS_DB")
        return cls(
            content_path=Path(content_path).expanduser() if content_path else None,
            progress_db=Path(progress_db).expanduser() if progress_db else DEFAULT_PROGRESS_DB,
            execution_delay=_parse_delay(os.environ.get("SWIFTCAMP_EXECUTION_DELAY")),
            log_level=os.environ.get("SWIFTCAMP_LOG_LEVEL", "INFO").upper(),
        )


def _parse_delay(value: Optional[str]) -> float:
    if not value:
        return 0.0
    try:
        delay = float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid SWIFTCAMP_EXECUTION_DELAY: {value!r}")
        return 0.0
    return max(0.0, delay)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def setup_logging(level: Optional[str] = None):
    """Configure root logging in the project's format."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
