"""JSON export/import of the mission log."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from c2c_decipher.config.settings import EXPORT_PREFIX, EXPORT_SUFFIX, IMPORTED_LABEL
from c2c_decipher.history.mission_log import MissionLog
from c2c_decipher.history.models import HistoryEntry

logger = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid log file format."
PARSE_FAILED = "Failed to parse log file."
READ_FAILED = "Failed to read file."


@dataclass
class ImportResult:
    """Outcome of reading a log file: entries on success, a message on failure."""

    entries: list[HistoryEntry] = field(default_factory=list)
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def _is_utf8_encodable(entry: HistoryEntry) -> bool:
    try:
        for value in entry.to_record().values():
            value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def export_file_name(requested_name: str = "", today: Optional[date] = None) -> str:
    """Final export file name: trimmed request or dated default, with .json suffix."""
    name = requested_name.strip()
    if not name:
        name = f"{EXPORT_PREFIX}{(today or date.today()).isoformat()}"
    if not name.endswith(EXPORT_SUFFIX):
        name += EXPORT_SUFFIX
    return name


class LogSerializer:
    """Converts a MissionLog to and from its portable JSON form."""

    def export(
        self,
        log: MissionLog,
        requested_name: str = "",
        today: Optional[date] = None,
    ) -> tuple[bytes, str]:
        """Serialize the log newest-first. Returns (file bytes, file name)."""
        records = [entry.to_record() for entry in log.snapshot()]
        payload = json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
        return payload, export_file_name(requested_name, today)

    def import_text(self, raw_text: str) -> ImportResult:
        """Parse and validate log file text. Never raises.

        All elements must be objects with a non-empty id and password, or
        nothing is imported. Missing or empty labels get a placeholder.
        """
        try:
            parsed = json.loads(raw_text)
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning("Failed to parse mission log: %s", e)
            return ImportResult(error=PARSE_FAILED)

        if not isinstance(parsed, list):
            logger.warning("Mission log is a %s, not a list", type(parsed).__name__)
            return ImportResult(error=INVALID_FORMAT)

        for index, item in enumerate(parsed):
            if not isinstance(item, dict) or not item.get("id") or not item.get("password"):
                logger.warning("Mission log element %d lacks id or password", index)
                return ImportResult(error=INVALID_FORMAT)

        entries = [
            HistoryEntry.from_record({**item, "label": item.get("label") or IMPORTED_LABEL})
            for item in parsed
        ]
        # Lone surrogates parse from \ud800 escapes but cannot be exported as UTF-8
        for index, entry in enumerate(entries):
            if not _is_utf8_encodable(entry):
                logger.warning("Mission log element %d has text that is not valid UTF-8", index)
                return ImportResult(error=INVALID_FORMAT)
        return ImportResult(entries=entries)

    def import_into(self, log: MissionLog, raw_text: str) -> ImportResult:
        """Import and, on success, replace the whole log. Not a merge."""
        result = self.import_text(raw_text)
        if result.ok:
            log.replace_all(result.entries)
        return result
