"""Data models for the derivation layer."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum


# Python attribute name -> name used by the form and the log file
WIRE_NAMES = {
    "serial_number": "serialNumber",
    "device_name": "deviceName",
    "device_ip": "deviceIp",
    "device_model": "deviceModel",
    "fab_day": "fabDay",
    "fab_month": "fabMonth",
    "latency": "latency",
}


@dataclass(frozen=True)
class DeviceDescriptor:
    """The seven identification fields of a device."""

    serial_number: str = ""  # XXXX-XXXX, uppercased upstream
    device_name: str = ""
    device_ip: str = ""
    device_model: str = ""  # XXX-XXX, uppercased upstream
    fab_day: str = ""  # 01-31
    fab_month: str = ""  # 01-12
    latency: str = ""  # milliseconds

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_dict(self) -> dict[str, str]:
        return {wire: getattr(self, name) for name, wire in WIRE_NAMES.items()}

    def replace(self, **changes: str) -> DeviceDescriptor:
        return replace(self, **changes)


class CodeStatus(str, Enum):
    OK = "OK"
    PENDING = "PENDING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class DerivedCode:
    """Outcome of a derivation: a code, or a pending/error marker.

    Use the ``ok``, ``pending`` and ``error`` constructors rather than building
    instances directly.
    """

    status: CodeStatus
    value: str = ""
    segments: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    reason: str = ""

    @classmethod
    def ok(cls, value: str, segments: tuple[str, ...] = ()) -> DerivedCode:
        return cls(CodeStatus.OK, value=value, segments=tuple(segments))

    @classmethod
    def pending(cls, missing: tuple[str, ...] = ()) -> DerivedCode:
        return cls(CodeStatus.PENDING, missing=tuple(missing))

    @classmethod
    def error(cls, reason: str) -> DerivedCode:
        return cls(CodeStatus.ERROR, reason=reason)

    @property
    def is_valid(self) -> bool:
        return self.status is CodeStatus.OK

    @property
    def text(self) -> str:
        """Code as shown to the user and stored in the mission log."""
        if self.status is CodeStatus.OK:
            return self.value
        return self.status.value


@dataclass
class SegmentBreakdown:
    """Intermediate values of one derivation, kept for display and debugging."""

    first_digit: int | None = None
    model_key: str = ""
    latency_ms: int | None = None
    ip_digit_sum: int = 0
    vowels: int = 0
    consonants: int = 0
    segments: dict[str, str] = field(default_factory=dict)
