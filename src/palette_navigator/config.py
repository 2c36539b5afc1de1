"""Environment-aware settings.

Variables:
    PALETTE_NAVIGATOR_DB  path of the SQLite key-value file
    LOG_LEVEL             logging level name (default WARNING)
    LOG_FORMAT            "text" or "json"
"""
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_PATH = str(Path.home() / ".palette_navigator" / "palette.db")


@dataclass
class Settings:
    db_path: str = DEFAULT_DB_PATH
    log_level: str = "WARNING"
    log_format: str = "text"


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ
    log_format = env.get("LOG_FORMAT", "text").lower()
    if log_format not in ("text", "json"):
        log_format = "text"
    return Settings(
        db_path=env.get("PALETTE_NAVIGATOR_DB", DEFAULT_DB_PATH),
        log_level=env.get("LOG_LEVEL", "WARNING").upper(),
        log_format=log_format,
    )
