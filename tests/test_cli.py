"""Tests for the pairsync command-line interface."""

import logging

import pytest
from click.testing import CliRunner

from pairsync.cli import cli
from pairsync.config.settings import LoggingConfig, PairConfig, SyncConfig
from pairsync.utils.file_utils import FileHelper

from conftest import T0


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("pairsync")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(make_file, tmp_path):
    local = make_file("local/notes.txt", "fresh", mtime=T0 + 60)
    usb = make_file("usb/notes.txt", "stale", mtime=T0)
    path = tmp_path / "pairsync.yaml"
    SyncConfig(pairs=[PairConfig(name="notes", first=str(local), second=str(usb))]).to_yaml(path)
    return path, local, usb


class TestSyncCommand:

    def test_sync(self, runner, config_file):
        path, local, usb = config_file
        result = runner.invoke(cli, ['sync', '--config', str(path)])

        assert result.exit_code == 0, result.output
        assert "completed" in result.output
        assert usb.read_text(encoding="utf-8") == "fresh"

    def test_dry_run(self, runner, config_file):
        path, local, usb = config_file
        result = runner.invoke(cli, ['sync', '--config', str(path), '--dry-run'])

        assert result.exit_code == 0, result.output
        assert "planned" in result.output
        assert usb.read_text(encoding="utf-8") == "stale"

    def test_unknown_pair(self, runner, config_file):
        path, _, _ = config_file
        result = runner.invoke(cli, ['sync', '--config', str(path), '--pair', 'nope'])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ['sync', '--config', str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "Error loading" in result.output

    def test_failed_pair_exit_code(self, runner, config_file):
        path, local, _ = config_file
        local.unlink()
        result = runner.invoke(cli, ['sync', '--config', str(path)])
        assert result.exit_code == 1
        assert "failed" in result.output


class TestSyncPairCommand:

    def test_sync_pair_with_backup(self, runner, make_file, tmp_path):
        first = make_file("a/report.docx", "old", mtime=T0)
        second = make_file("b/report.docx", "new", mtime=T0 + 10)
        backup_dir = tmp_path / "backup"

        result = runner.invoke(cli, [
            'sync-pair', str(first), str(second),
            '--backup', '--backup-dir', str(backup_dir),
        ])

        assert result.exit_code == 0, result.output
        assert first.read_text(encoding="utf-8") == "new"
        backups = list(backup_dir.iterdir())
        assert len(backups) == 1
        assert backups[0].name.startswith("report[")
        assert backups[0].read_text(encoding="utf-8") == "old"

    def test_sync_pair_name_mismatch(self, runner, make_file):
        first = make_file("a/report.docx")
        second = make_file("b/report.pdf")

        result = runner.invoke(cli, ['sync-pair', str(first), str(second)])

        assert result.exit_code == 1
        assert "Invalid pair" in result.output


class TestStatusCommand:

    def test_status(self, runner, config_file):
        path, _, _ = config_file
        result = runner.invoke(cli, ['status', '--config', str(path), '--checksum'])

        assert result.exit_code == 0, result.output
        assert "notes" in result.output

    def test_status_uses_configured_logging(self, runner, make_file, tmp_path, monkeypatch):
        local = make_file("local/notes.txt", "a")
        usb = make_file("usb/notes.txt", "b")
        log_file = tmp_path / "logs" / "pairsync.log"
        path = tmp_path / "pairsync.yaml"
        SyncConfig(
            pairs=[PairConfig(name="notes", first=str(local), second=str(usb))],
            logging=LoggingConfig(file=str(log_file), console=False),
        ).to_yaml(path)

        def unreadable(file_path, chunk_size=8192):
            raise PermissionError(f"cannot read {file_path}")

        monkeypatch.setattr(FileHelper, "calculate_file_hash", staticmethod(unreadable))

        result = runner.invoke(cli, ["status", "--config", str(path), "--checksum"])

        assert result.exit_code == 0, result.output
        for handler in logging.getLogger("pairsync").handlers:
            handler.flush()
        log_text = log_file.read_text(encoding="utf-8")
        assert "WARNING - Could not inspect pair 'notes'" in log_text


class TestInitCommand:

    def test_init_writes_sample(self, runner, tmp_path):
        path = tmp_path / "config" / "pairsync.yaml"
        result = runner.invoke(cli, ['init', '--config', str(path)])

        assert result.exit_code == 0, result.output
        assert SyncConfig.from_yaml(path).pairs[0].name == "notes"

    def test_init_keeps_existing_without_confirmation(self, runner, tmp_path):
        path = tmp_path / "pairsync.yaml"
        path.write_text("pairs: []\n")

        result = runner.invoke(cli, ['init', '--config', str(path)], input="n\n")

        assert result.exit_code == 0
        assert path.read_text() == "pairs: []\n"


def test_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert "1.0.0" in result.output
