"""Copyable terminal command strings built from descriptor fields."""

from __future__ import annotations

from c2c_decipher.derivation.models import DeviceDescriptor


def _command(verb: str, value: str) -> str:
    return f"/{verb} {value}" if value else ""


def identify_command(serial_number: str) -> str:
    return _command("identify", serial_number)


def scan_command(device_name: str) -> str:
    return _command("scan", device_name)


def ping_command(device_ip: str) -> str:
    return _command("ping", device_ip)


def override_command(device_ip: str) -> str:
    return _command("override", device_ip)


def descriptor_commands(descriptor: DeviceDescriptor) -> dict[str, str]:
    """Commands for the current form, keyed by label. Empty fields give ''."""
    return {
        "Identify": identify_command(descriptor.serial_number),
        "Scan": scan_command(descriptor.device_name),
        "Ping": ping_command(descriptor.device_ip),
        "Override": override_command(descriptor.device_ip),
    }
