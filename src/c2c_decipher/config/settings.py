"""Constants and environment-driven configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# Result sentinels
PENDING = "PENDING"
ERROR = "ERROR"
INVALID_CODES = frozenset({PENDING, ERROR})

# Segment fallbacks
NO_DIGIT_SEGMENT = "??"
UNPARSABLE_LATENCY_SEGMENT = "00"
LATENCY_THRESHOLD_MS = 50

# Mission log placeholders
DEFAULT_LABEL = "Untitled Mission"
IMPORTED_LABEL = "Imported Entry"
MISSING_VALUE = "N/A"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Export file naming
EXPORT_PREFIX = "c2c-log-"
EXPORT_SUFFIX = ".json"

# Form choices
MONTHS = [f"{i:02d}" for i in range(1, 13)]
DAYS = [f"{i:02d}" for i in range(1, 32)]

DEFAULT_LOG_FILE = str(Path.home() / ".c2c_decipher" / "mission-log.json")


@dataclass
class DecipherConfig:
    """Runtime settings for the command-line collaborator."""

    # Mission log file imported and exported by each CLI run
    log_file: str = DEFAULT_LOG_FILE
    # Directory that `history export` writes into
    export_dir: str = "."
    # Logging level name
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> DecipherConfig:
        """Load configuration from environment variables."""
        return cls(
            log_file=os.environ.get("C2C_LOG_FILE", DEFAULT_LOG_FILE),
            export_dir=os.environ.get("C2C_EXPORT_DIR", "."),
            log_level=os.environ.get("C2C_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if config is valid."""
        errors = []
        if not self.log_file:
            errors.append("C2C_LOG_FILE must not be empty")
        elif Path(self.log_file).is_dir():
            errors.append(f"C2C_LOG_FILE points to a directory: {self.log_file}")
        if Path(self.export_dir).exists() and not Path(self.export_dir).is_dir():
            errors.append(f"C2C_EXPORT_DIR is not a directory: {self.export_dir}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"C2C_LOG_LEVEL is not a logging level: {self.log_level}")
        return errors
