"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

JOURNAL_MODES = ("DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF")
SYNCHRONOUS_MODES = ("OFF", "NORMAL", "FULL", "EXTRA")
LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class StoreConfig:
    """Store tuning knobs. Every field has a default; see load_config for env names."""

    # Files
    file_extension: str = ".db"

    # Engine
    busy_timeout_seconds: float = 5.0
    journal_mode: str = "WAL"
    synchronous: str = "FULL"

    # Application
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self) -> None:
        errors = []
        if not self.file_extension.startswith(".") or len(self.file_extension) < 2:
            errors.append(f"file_extension must look like '.db', got {self.file_extension!r}")
        if self.busy_timeout_seconds < 0:
            errors.append(f"busy_timeout_seconds must be >= 0, got {self.busy_timeout_seconds!r}")
        if self.journal_mode.upper() not in JOURNAL_MODES:
            errors.append(f"journal_mode must be one of {', '.join(JOURNAL_MODES)}")
        if self.synchronous.upper() not in SYNCHRONOUS_MODES:
            errors.append(f"synchronous must be one of {', '.join(SYNCHRONOUS_MODES)}")
        if self.log_format not in LOG_FORMATS:
            errors.append(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        if errors:
            raise ValueError(f"Invalid store configuration: {'; '.join(errors)}")


def load_config(env_path: str | Path | None = None) -> StoreConfig:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development), then builds a
    StoreConfig. Unset variables fall back to the defaults. Raises ValueError
    for malformed values.
    """
    load_dotenv(dotenv_path=env_path)

    try:
        busy_timeout = float(os.environ.get("SQLITECOLLECTIONS_BUSY_TIMEOUT", "5.0"))
    except ValueError:
        raise ValueError(
            "SQLITECOLLECTIONS_BUSY_TIMEOUT must be a number of seconds"
        ) from None

    return StoreConfig(
        # Files
        file_extension=os.environ.get("SQLITECOLLECTIONS_FILE_EXTENSION", ".db"),
        # Engine
        busy_timeout_seconds=busy_timeout,
        journal_mode=os.environ.get("SQLITECOLLECTIONS_JOURNAL_MODE", "WAL"),
        synchronous=os.environ.get("SQLITECOLLECTIONS_SYNCHRONOUS", "FULL"),
        # Application
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=os.environ.get("LOG_FORMAT", "json"),
    )
