"""Integration tests for the scan, clean and restore workflow.

These tests drive the CLI end to end against real directory trees and
check the filesystem afterwards.
"""

import json
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from dirpurge.cli.main import app
from dirpurge.filesystem.trash import Trash
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, write_file: Callable[[Path, int], Path]) -> Path:
    """Two projects with dependency and build directories."""
    root = tmp_path / "workspace"
    write_file(root / "web" / "node_modules" / "react" / "index.js", 4096)
    write_file(root / "web" / "src" / "app.ts", 200)
    write_file(root / "tool" / "venv" / "lib" / "site.py", 2048)
    write_file(root / "tool" / "target" / "debug" / "bin", 1024)
    return root


class TestPurgeWorkflow:
    """End-to-end tests for dirpurge."""

    def test_scan_then_clean_then_restore(self, tmp_path: Path, workspace: Path) -> None:
        """Scanned directories are archived, trashed and restorable."""
        report_path = tmp_path / "scan.json"
        trash_dir = tmp_path / "trash"
        backup_dir = tmp_path / "backups"

        scan_result = runner.invoke(
            app,
            [
                "scan",
                str(workspace),
                "-t",
                "node_modules",
                "-t",
                "venv",
                "--json",
                str(report_path),
            ],
        )
        assert scan_result.exit_code == 0
        scanned = json.loads(report_path.read_text())
        assert scanned["count"] == 2

        clean_result = runner.invoke(
            app,
            [
                "clean",
                str(workspace),
                "-t",
                "node_modules",
                "-t",
                "venv",
                "--delete",
                "--yes",
                "--archive",
                "--backup-dir",
                str(backup_dir),
                "--trash-dir",
                str(trash_dir),
            ],
        )
        assert clean_result.exit_code == 0
        assert not (workspace / "web" / "node_modules").exists()
        assert not (workspace / "tool" / "venv").exists()
        assert (workspace / "tool" / "target").is_dir()

        archives = sorted(backup_dir.glob("*.zip"))
        assert len(archives) == 2
        for archive in archives:
            with zipfile.ZipFile(archive) as zf:
                assert zf.testzip() is None

        trash = Trash(trash_dir)
        entries = {entry.original_path.name: entry for entry in trash.entries()}
        assert set(entries) == {"node_modules", "venv"}

        restored = trash.restore(entries["venv"].name)
        assert restored == (workspace / "tool" / "venv").resolve()
        assert (restored / "lib" / "site.py").stat().st_size == 2048

    def test_saved_settings_drive_later_run(self, tmp_path: Path, workspace: Path) -> None:
        """Options saved with --save-config are reused via --config."""
        settings_path = tmp_path / "purge.toml"

        first = runner.invoke(
            app,
            ["scan", str(workspace), "-t", "target", "--save-config", str(settings_path)],
        )
        assert first.exit_code == 0
        assert settings_path.is_file()

        second = runner.invoke(
            app,
            [
                "clean",
                str(workspace),
                "--config",
                str(settings_path),
                "--delete",
                "--yes",
                "--no-trash",
            ],
        )

        assert second.exit_code == 0
        assert not (workspace / "tool" / "target").exists()
        assert (workspace / "web" / "node_modules").is_dir()

    def test_dry_run_report_matches_tree(self, tmp_path: Path, workspace: Path) -> None:
        """A dry-run JSON report lists planned actions and changes nothing."""
        report_path = tmp_path / "plan.json"

        result = runner.invoke(
            app,
            [
                "clean",
                str(workspace),
                "-t",
                "node_modules",
                "--dry-run",
                "--backup",
                "--backup-dir",
                str(tmp_path / "bk"),
                "--json",
                str(report_path),
            ],
        )

        assert result.exit_code == 0
        report = json.loads(report_path.read_text())
        assert report["summary"]["dry_run"] == 1
        record = report["directories"][0]
        assert [a["action"] for a in record["actions"]] == ["backup", "trash"]
        assert all(a["status"] == "dry_run" for a in record["actions"])
        assert (workspace / "web" / "node_modules").is_dir()
        assert not (tmp_path / "bk").exists()
