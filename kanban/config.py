"""
FILE: kanban/config.py
PURPOSE: Runtime configuration (store location, log level)
EXPORTS:
  - Config (dataclass)
  - load_config(db_path, log_level) -> Config
  - DEFAULT_DB_PATH
  - LOG_LEVELS
DEPENDENCIES:
  - dataclasses, os, pathlib (stdlib)
  - kanban.core.exceptions (ValidationError)
NOTES:
  - Precedence: explicit argument > environment variable > default
  - KANBAN_DB selects the store, KANBAN_LOG_LEVEL the log level
  - Log level names are case-insensitive; unknown names raise ValidationError
  - Tests always pass db_path explicitly
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.exceptions import ValidationError

DEFAULT_DB_PATH = str(Path.home() / ".kanban" / "kanban.db")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_DB_PATH = "KANBAN_DB"
ENV_LOG_LEVEL = "KANBAN_LOG_LEVEL"


@dataclass
class Config:
    """Settings needed to open the store and configure logging."""

    db_path: str = DEFAULT_DB_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(db_path: Optional[str] = None, log_level: Optional[str] = None) -> Config:
    """
    Build a Config from arguments, then environment, then defaults.

    Raises:
        ValidationError: If the resolved log level is not one of LOG_LEVELS
    """
    level = (log_level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")

    return Config(
        db_path=db_path or os.environ.get(ENV_DB_PATH) or DEFAULT_DB_PATH,
        log_level=level,
    )
