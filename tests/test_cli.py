"""Tests for the Typer CLI."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from c2c_decipher.cli.app import app

runner = CliRunner()

MAIN_SERVER_ARGS = [
    "derive",
    "--serial", "a1b2-c3d4",
    "--name", "MainServer",
    "--ip", "192.168.0.1",
    "--model", "gen-100",
    "--latency", "45",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("C2C_LOG_FILE", str(tmp_path / "env-log.json"))
    monkeypatch.setenv("C2C_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.delenv("C2C_LOG_LEVEL", raising=False)


class TestDeriveCommand:
    """Test the derive command."""

    def test_derive_reference_code(self):
        result = runner.invoke(app, MAIN_SERVER_ARGS)
        assert result.exit_code == 0
        assert "00012864" in result.output
        assert "/identify A1B2-C3D4" in result.output

    def test_derive_shows_segment_inputs_and_override(self):
        result = runner.invoke(app, MAIN_SERVER_ARGS)
        assert result.exit_code == 0
        assert "IP digit sum 28" in result.output
        assert "4 vowels, 6 consonants" in result.output
        assert "Latency 45 < 50: fab day" in result.output
        assert "/override 192.168.0.1" in result.output

    def test_derive_pending(self):
        result = runner.invoke(app, ["derive", "--serial", "A1B2-C3D4"])
        assert result.exit_code == 0
        assert "PENDING" in result.output

    def test_save_pending_fails(self, tmp_path):
        log_path = tmp_path / "log.json"
        result = runner.invoke(app, ["derive", "--serial", "A1B2-C3D4", "--save", "--log-file", str(log_path)])
        assert result.exit_code == 1
        assert not log_path.exists()

    def test_save_appends_to_log_file(self, tmp_path):
        log_path = tmp_path / "log.json"
        for label in ("First", "Second"):
            result = runner.invoke(app, MAIN_SERVER_ARGS + ["--save", "--label", label, "--log-file", str(log_path)])
            assert result.exit_code == 0
        records = json.loads(log_path.read_text(encoding="utf-8"))
        assert [r["label"] for r in records] == ["Second", "First"]
        assert records[0]["password"] == "00012864"
        assert records[0]["serialNumber"] == "A1B2-C3D4"

    def test_save_uses_env_log_file(self, tmp_path):
        result = runner.invoke(app, MAIN_SERVER_ARGS + ["--save"])
        assert result.exit_code == 0
        records = json.loads((tmp_path / "env-log.json").read_text(encoding="utf-8"))
        assert records[0]["label"] == "Untitled Mission"

    def test_format_warning_shown(self):
        result = runner.invoke(app, MAIN_SERVER_ARGS + ["--day", "32"])
        assert result.exit_code == 0
        assert "Warning" in result.output


class TestCommandsCommand:
    """Test the commands command."""

    def test_plain_output(self):
        result = runner.invoke(app, ["commands", "--serial", "a1b2-c3d4", "--ip", "10.0.0.1", "--plain"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "/identify A1B2-C3D4",
            "/ping 10.0.0.1",
            "/override 10.0.0.1",
        ]

    def test_requires_a_value(self):
        result = runner.invoke(app, ["commands"])
        assert result.exit_code == 1


class TestHistoryCommand:
    """Test the history command actions."""

    def test_list_empty(self):
        result = runner.invoke(app, ["history", "list"])
        assert result.exit_code == 0
        assert "No entries" in result.output

    def test_list_entries(self, log_file):
        result = runner.invoke(app, ["history", "list", "--log-file", str(log_file)])
        assert result.exit_code == 0
        assert "XY0921XX" in result.output
        assert "Vault" in result.output

    def test_delete(self, log_file):
        result = runner.invoke(app, ["history", "delete", "--entry-id", "b2", "--log-file", str(log_file)])
        assert result.exit_code == 0
        records = json.loads(log_file.read_text(encoding="utf-8"))
        assert [r["id"] for r in records] == ["c3", "a1"]

    def test_delete_unknown_is_noop(self, log_file):
        before = log_file.read_text(encoding="utf-8")
        result = runner.invoke(app, ["history", "delete", "--entry-id", "zz", "--log-file", str(log_file)])
        assert result.exit_code == 0
        assert log_file.read_text(encoding="utf-8") == before

    def test_export(self, tmp_path, log_file):
        result = runner.invoke(app, [
            "history", "export", "--log-file", str(log_file),
            "--name", "  backup ", "--output-dir", str(tmp_path / "out"),
        ])
        assert result.exit_code == 0
        records = json.loads((tmp_path / "out" / "backup.json").read_text(encoding="utf-8"))
        assert [r["id"] for r in records] == ["c3", "b2", "a1"]

    def test_export_default_dir_from_env(self, tmp_path, log_file):
        result = runner.invoke(app, ["history", "export", "--log-file", str(log_file), "--name", "x"])
        assert result.exit_code == 0
        assert (tmp_path / "exports" / "x.json").exists()

    def test_import_replaces_log(self, tmp_path, log_file):
        source = tmp_path / "incoming.json"
        source.write_text('[{"id": "n1", "password": "AB0110"}]', encoding="utf-8")
        result = runner.invoke(app, ["history", "import", "--source", str(source), "--log-file", str(log_file)])
        assert result.exit_code == 0
        records = json.loads(log_file.read_text(encoding="utf-8"))
        assert records == [{
            "id": "n1", "timestamp": "", "label": "Imported Entry",
            "serialNumber": "", "deviceIp": "", "password": "AB0110",
        }]

    def test_import_over_unreadable_log(self, tmp_path):
        log_path = tmp_path / "corrupt.json"
        log_path.write_text("{garbage", encoding="utf-8")
        source = tmp_path / "incoming.json"
        source.write_text('[{"id": "n1", "label": "Fresh", "password": "AB0110"}]', encoding="utf-8")
        result = runner.invoke(app, ["history", "import", "--source", str(source), "--log-file", str(log_path)])
        assert result.exit_code == 0
        records = json.loads(log_path.read_text(encoding="utf-8"))
        assert [r["label"] for r in records] == ["Fresh"]

    def test_list_unreadable_log_fails(self, tmp_path):
        log_path = tmp_path / "corrupt.json"
        log_path.write_text("{garbage", encoding="utf-8")
        result = runner.invoke(app, ["history", "list", "--log-file", str(log_path)])
        assert result.exit_code == 1
        assert "Failed to parse log file." in result.output

    def test_invalid_import_leaves_log(self, tmp_path, log_file):
        before = log_file.read_text(encoding="utf-8")
        source = tmp_path / "incoming.json"
        source.write_text('[{"id": "n1"}]', encoding="utf-8")
        result = runner.invoke(app, ["history", "import", "--source", str(source), "--log-file", str(log_file)])
        assert result.exit_code == 1
        assert "Invalid log file format." in result.output
        assert log_file.read_text(encoding="utf-8") == before

    def test_unknown_action(self):
        result = runner.invoke(app, ["history", "purge"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


class TestConfig:
    """Test configuration handling in the app callback."""

    def test_bad_log_level(self):
        result = runner.invoke(app, ["--log-level", "chatty", "history", "list"])
        assert result.exit_code == 1
