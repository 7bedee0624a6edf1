"""Mission log: ordered, newest-first record of saved codes."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Iterator, Optional, Union

from c2c_decipher.config.settings import (
    DEFAULT_LABEL,
    INVALID_CODES,
    MISSING_VALUE,
    TIMESTAMP_FORMAT,
)
from c2c_decipher.derivation.models import DerivedCode, DeviceDescriptor
from c2c_decipher.history.models import HistoryEntry

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    return uuid.uuid4().hex[:12]


class MissionLog:
    """In-memory log owned by a single session. Not thread-safe."""

    def __init__(self, entries: Iterable[HistoryEntry] = ()) -> None:
        self._entries: list[HistoryEntry] = list(entries)

    def append(
        self,
        code: Union[DerivedCode, str],
        descriptor: DeviceDescriptor,
        label: str = "",
        now: Optional[datetime] = None,
    ) -> Optional[HistoryEntry]:
        """Save a code at the head of the log.

        Pending and error codes are rejected without touching the log.
        Returns the new entry, or None when rejected.
        """
        if isinstance(code, DerivedCode):
            if not code.is_valid:
                logger.debug("Not saving %s code", code.text)
                return None
            text = code.text
        else:
            text = code
        if not text or text in INVALID_CODES:
            logger.debug("Not saving %r code", text)
            return None

        entry = HistoryEntry(
            id=new_entry_id(),
            timestamp=(now or datetime.now()).strftime(TIMESTAMP_FORMAT),
            label=label.strip() or DEFAULT_LABEL,
            serial_number=descriptor.serial_number or MISSING_VALUE,
            device_ip=descriptor.device_ip or MISSING_VALUE,
            password=text,
        )
        self._entries.insert(0, entry)
        logger.info("Saved %s as %r (%s)", entry.password, entry.label, entry.id)
        return entry

    def remove(self, entry_id: str) -> bool:
        """Remove the entry with this id. Returns False if there was none."""
        kept = [e for e in self._entries if e.id != entry_id]
        if len(kept) == len(self._entries):
            return False
        self._entries = kept
        logger.info("Removed entry %s", entry_id)
        return True

    def replace_all(self, entries: Iterable[HistoryEntry]) -> None:
        self._entries = list(entries)
        logger.info("Mission log replaced with %d entries", len(self._entries))

    def clear(self) -> None:
        self._entries = []

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def snapshot(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.snapshot())
