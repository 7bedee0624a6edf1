"""Session facade: the current descriptor, its code and the mission log."""

from __future__ import annotations

from datetime import date
from typing import Optional

from c2c_decipher.derivation.commands import descriptor_commands, override_command
from c2c_decipher.derivation.engine import CodeDerivationEngine
from c2c_decipher.derivation.models import DerivedCode, DeviceDescriptor
from c2c_decipher.history.mission_log import MissionLog
from c2c_decipher.history.models import HistoryEntry
from c2c_decipher.history.serializer import ImportResult, LogSerializer

INITIAL_DESCRIPTOR = DeviceDescriptor(fab_day="01", fab_month="01")
UPPERCASE_FIELDS = ("serial_number", "device_model")


class DecipherSession:
    """State a form-style front end works against.

    Descriptor edits do not recompute the code; call ``recompute`` after
    changing fields.
    """

    def __init__(
        self,
        log: Optional[MissionLog] = None,
        engine: Optional[CodeDerivationEngine] = None,
    ) -> None:
        self.log = log if log is not None else MissionLog()
        self._engine = engine or CodeDerivationEngine()
        self._serializer = LogSerializer()
        self.descriptor = INITIAL_DESCRIPTOR
        self.code = DerivedCode.pending(())

    def update(self, **fields: str) -> DeviceDescriptor:
        """Replace descriptor fields. Serial number and model are uppercased."""
        unknown = set(fields) - set(DeviceDescriptor.field_names())
        if unknown:
            raise TypeError(f"Unknown descriptor fields: {', '.join(sorted(unknown))}")
        for name in UPPERCASE_FIELDS:
            if isinstance(fields.get(name), str):
                fields[name] = fields[name].upper()
        self.descriptor = self.descriptor.replace(**fields)
        return self.descriptor

    def recompute(self) -> DerivedCode:
        self.code = self._engine.derive(self.descriptor)
        return self.code

    def save(self, label: str = "") -> Optional[HistoryEntry]:
        return self.log.append(self.code, self.descriptor, label)

    def delete(self, entry_id: str) -> bool:
        return self.log.remove(entry_id)

    def reset(self) -> None:
        """Clear the form. The mission log is kept."""
        self.descriptor = INITIAL_DESCRIPTOR
        self.code = DerivedCode.pending(())

    def export(self, requested_name: str = "", today: Optional[date] = None) -> tuple[bytes, str]:
        return self._serializer.export(self.log, requested_name, today)

    def import_text(self, raw_text: str) -> ImportResult:
        return self._serializer.import_into(self.log, raw_text)

    def commands(self, include_overrides: bool = False) -> dict[str, str]:
        """Copyable commands for the form, optionally with per-entry overrides."""
        cmds = descriptor_commands(self.descriptor)
        if self.code.is_valid:
            cmds["Code"] = self.code.text
        if include_overrides:
            for entry in self.log:
                cmds[f"Override {entry.id}"] = override_command(entry.device_ip)
        return cmds
