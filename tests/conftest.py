"""Shared test fixtures and sample descriptors."""

from __future__ import annotations

import json

import pytest

from c2c_decipher.derivation.models import DeviceDescriptor
from c2c_decipher.history.mission_log import MissionLog
from c2c_decipher.history.models import HistoryEntry


@pytest.fixture
def main_server():
    """The reference descriptor whose code is 00012864."""
    return DeviceDescriptor(
        serial_number="A1B2-C3D4",
        device_name="MainServer",
        device_ip="192.168.0.1",
        device_model="GEN-100",
        fab_day="01",
        fab_month="01",
        latency="45",
    )


@pytest.fixture
def populated_log():
    """A log with three entries, newest first."""
    return MissionLog([
        HistoryEntry("c3", "2025-11-30 08:10:00", "Vault", "Z9Y8-X7W6", "10.0.0.3", "XY0921XX"),
        HistoryEntry("b2", "2025-11-30 08:05:00", "Relay", "B2C3-D4E5", "10.0.0.2", "AB0310"),
        HistoryEntry("a1", "2025-11-30 08:00:00", "Gate", "A1B2-C3D4", "10.0.0.1", "00012864"),
    ])


@pytest.fixture
def log_file(tmp_path, populated_log):
    """A mission log file on disk with the populated log's records."""
    path = tmp_path / "mission-log.json"
    records = [e.to_record() for e in populated_log.snapshot()]
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return path


# Raw import payloads
SAMPLE_IMPORTS = {
    "legacy_no_label": '[{"id": "1700000000000", "timestamp": "10:15:02 AM", '
                       '"serialNumber": "A1B2-C3D4", "deviceIp": "192.168.0.1", "password": "00012864"}]',
    "empty_label": '[{"id": "x1", "timestamp": "t", "label": "", '
                   '"serialNumber": "N/A", "deviceIp": "N/A", "password": "AB0110"}]',
    "missing_password": '[{"id": "ok", "password": "AB0110"}, {"id": "bad"}]',
    "empty_id": '[{"id": "", "password": "AB0110"}]',
    "not_a_list": '{"id": "x", "password": "AB0110"}',
    "non_object_element": '[{"id": "x", "password": "AB0110"}, "junk"]',
    "malformed": '[{"id": "x", "password": ',
    "empty_list": "[]",
}
