"""Unit tests for the main CLI application."""

import logging
from pathlib import Path

from dirpurge import __version__
from dirpurge.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"dirpurge version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """--help shows every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "clean", "config"):
            assert command in result.output

    def test_no_args_shows_help(self) -> None:
        """Running without arguments prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_log_file_written(self, tmp_path: Path) -> None:
        """--log writes debug records to the given file."""
        log_file = tmp_path / "run.log"
        root = tmp_path / "root"
        root.mkdir()

        result = runner.invoke(app, ["--log", str(log_file), "scan", str(root)])

        logging.getLogger("dirpurge").handlers.clear()
        assert result.exit_code == 0
        assert log_file.is_file()
        assert "Found 0 matching directories" in log_file.read_text()

    def test_unopenable_log_file(self, tmp_path: Path) -> None:
        """A log file in a missing directory fails the command."""
        result = runner.invoke(
            app, ["--log", str(tmp_path / "missing" / "run.log"), "config", "path"]
        )

        assert result.exit_code == 1
        assert "Failed to create log file" in result.output
