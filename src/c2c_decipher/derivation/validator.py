"""Completeness and shape checks for device descriptors."""

from __future__ import annotations

from c2c_decipher.config.settings import DAYS, MONTHS
from c2c_decipher.derivation.models import WIRE_NAMES, DeviceDescriptor

DIGITS = "0123456789"
UPPER_ALNUM = "ABCDEFGHIJKLMNOPQRSTUVWXYZ" + DIGITS


def _matches_groups(value: str, group_sizes: tuple[int, ...]) -> bool:
    """True if value is uppercase alphanumeric groups joined by single dashes."""
    parts = value.split("-")
    if len(parts) != len(group_sizes):
        return False
    return all(
        len(part) == size and all(ch in UPPER_ALNUM for ch in part)
        for part, size in zip(parts, group_sizes)
    )


class DescriptorValidator:
    """Gates derivation on a complete descriptor.

    Completeness is the only hard requirement. Shape checks are advisory: the
    engine derives a code from any complete descriptor.
    """

    def missing_fields(self, descriptor: DeviceDescriptor) -> list[str]:
        """Return wire names of empty fields, in form order."""
        return [
            wire for name, wire in WIRE_NAMES.items()
            if getattr(descriptor, name) in (None, "")
        ]

    def non_text_fields(self, descriptor: DeviceDescriptor) -> list[str]:
        return [
            wire for name, wire in WIRE_NAMES.items()
            if not isinstance(getattr(descriptor, name), str)
        ]

    def is_complete(self, descriptor: DeviceDescriptor) -> bool:
        return not self.missing_fields(descriptor)

    def format_warnings(self, descriptor: DeviceDescriptor) -> list[str]:
        """Return human-readable notes for fields outside their expected shape."""
        warnings = []
        d = descriptor
        if d.serial_number and not _matches_groups(d.serial_number, (4, 4)):
            warnings.append(f"Serial number {d.serial_number!r} is not in XXXX-XXXX form")
        if d.device_model and not _matches_groups(d.device_model, (3, 3)):
            warnings.append(f"Device model {d.device_model!r} is not in XXX-XXX form")
        if d.fab_day and d.fab_day not in DAYS:
            warnings.append(f"Fabrication day {d.fab_day!r} is not between 01 and 31")
        if d.fab_month and d.fab_month not in MONTHS:
            warnings.append(f"Fabrication month {d.fab_month!r} is not between 01 and 12")
        if d.latency and not (d.latency.isascii() and d.latency.isdigit()):
            warnings.append(f"Latency {d.latency!r} is not a non-negative whole number")
        return warnings
