"""Data models for the mission log."""

from __future__ import annotations

from dataclasses import dataclass

# Export order of the record fields: (attribute, wire name)
ENTRY_FIELDS = (
    ("id", "id"),
    ("timestamp", "timestamp"),
    ("label", "label"),
    ("serial_number", "serialNumber"),
    ("device_ip", "deviceIp"),
    ("password", "password"),
)


@dataclass(frozen=True)
class HistoryEntry:
    """One saved derivation."""

    id: str
    timestamp: str  # YYYY-MM-DD HH:MM:SS for entries created here; imported text is kept
    label: str
    serial_number: str
    device_ip: str
    password: str  # derived code text

    def to_record(self) -> dict[str, str]:
        return {wire: getattr(self, attr) for attr, wire in ENTRY_FIELDS}

    @classmethod
    def from_record(cls, record: dict) -> HistoryEntry:
        """Build from a wire record. Missing fields become '', scalars become str."""
        values = {}
        for attr, wire in ENTRY_FIELDS:
            raw = record.get(wire)
            values[attr] = "" if raw is None else str(raw)
        return cls(**values)
