"""Reading and writing mission log files on disk."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from c2c_decipher.config.settings import DecipherConfig
from c2c_decipher.history.mission_log import MissionLog
from c2c_decipher.history.serializer import READ_FAILED, ImportResult, LogSerializer

logger = logging.getLogger(__name__)


def write_export(
    log: MissionLog,
    directory: str | Path,
    requested_name: str = "",
    today: Optional[date] = None,
) -> Path:
    """Write the export file into directory and return its path.

    Raises OSError if the file cannot be written.
    """
    payload, file_name = LogSerializer().export(log, requested_name, today)
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / file_name
    out_path.write_bytes(payload)
    logger.info("Exported %d entries to %s", len(log), out_path)
    return out_path


def read_import_file(path: str | Path) -> ImportResult:
    """Read and validate a log file. I/O and decode failures become a result.

    A leading UTF-8 byte order mark is skipped.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read mission log %s: %s", path, e)
        return ImportResult(error=READ_FAILED)
    return LogSerializer().import_text(raw)


def load_log_file(path: str | Path, log: MissionLog) -> ImportResult:
    """Replace log contents from path. A missing file loads as an empty log."""
    if not Path(path).exists():
        log.clear()
        return ImportResult()
    result = read_import_file(path)
    if result.ok:
        log.replace_all(result.entries)
    return result


def save_log_file(log: MissionLog, path: str | Path) -> Path:
    """Write the log to exactly this path in export format."""
    p = Path(path)
    payload, _ = LogSerializer().export(log, p.name)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(payload)
    logger.info("Saved %d entries to %s", len(log), p)
    return p


def resolve_log_file(log_file: str | None = None) -> str:
    """Resolve mission log path from argument, env var, or default.

    Priority: explicit arg > C2C_LOG_FILE env var > ~/.c2c_decipher/mission-log.json.
    """
    if log_file:
        return log_file
    return DecipherConfig.from_env().log_file
