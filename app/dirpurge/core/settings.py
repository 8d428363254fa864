"""Persistent settings for dirpurge.

Settings mirror the command line options and are stored as TOML in
~/.config/dirpurge/config.toml. Command line values override file values;
the merged settings are converted into the immutable ScanConfig and
DeletionConfig consumed by the pipeline.
"""

import os
import tomllib
from datetime import timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirpurge.core.paths import get_settings_path
from dirpurge.models.config import (
    DEFAULT_BACKUP_DIR,
    DEFAULT_CONFIRM_PHRASE,
    DEFAULT_TARGETS,
    DeletionConfig,
    ScanConfig,
)

_BYTES_PER_MB = 1024 * 1024


class PurgeSettings(BaseModel):
    """User-facing settings for a purge run.

    Sizes are expressed in megabytes and ages in days, as on the command
    line.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    targets: Annotated[
        list[str],
        Field(min_length=1, description="Directory names to search for"),
    ] = list(DEFAULT_TARGETS)
    excludes: Annotated[list[str], Field(description="Directory names to prune")] = []
    depth: Annotated[int, Field(ge=0, description="Maximum depth (0 = unlimited)")] = 0
    min_size_mb: Annotated[float | None, Field(ge=0, description="Minimum size in MB")] = None
    min_age_days: Annotated[int | None, Field(ge=0, description="Minimum age in days")] = None
    follow_symlinks: bool = False
    delete: bool = False
    yes: bool = False
    dry_run: bool = False
    use_trash: bool = True
    backup: bool = False
    archive: bool = False
    backup_dir: str = str(DEFAULT_BACKUP_DIR)
    trash_dir: str | None = None
    interactive: bool = False
    confirm_phrase: Annotated[str, Field(min_length=1)] = DEFAULT_CONFIRM_PHRASE
    json_path: Annotated[str | None, Field(alias="json")] = None
    csv_path: Annotated[str | None, Field(alias="csv")] = None
    log: str | None = None
    verbose: bool = False
    quiet: bool = False
    workers: Annotated[int, Field(ge=1, le=64)] = 1

    def merged(self, overrides: dict[str, Any]) -> "PurgeSettings":
        """Return a copy with non-None overrides applied and validated.

        Args:
            overrides: Field values from the command line; None means unset.

        Returns:
            New validated PurgeSettings.

        Raises:
            SettingsError: If an override is invalid.
        """
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return PurgeSettings.model_validate(data)
        except ValidationError as e:
            raise SettingsError(f"Invalid option: {e}") from e

    def to_scan_config(self) -> ScanConfig:
        """Build the scan criteria."""
        min_size = int(self.min_size_mb * _BYTES_PER_MB) if self.min_size_mb else 0
        min_age = timedelta(days=self.min_age_days) if self.min_age_days is not None else None
        return ScanConfig(
            targets=frozenset(self.targets),
            excludes=frozenset(self.excludes),
            max_depth=self.depth,
            follow_symlinks=self.follow_symlinks,
            min_size_bytes=min_size,
            min_age=min_age,
        )

    def to_deletion_config(self) -> DeletionConfig:
        """Build the deletion options."""
        return DeletionConfig(
            delete=self.delete,
            dry_run=self.dry_run,
            assume_yes=self.yes,
            use_trash=self.use_trash,
            backup=self.backup,
            archive=self.archive,
            backup_dir=Path(self.backup_dir).expanduser(),
            trash_dir=Path(self.trash_dir).expanduser() if self.trash_dir else None,
            interactive=self.interactive,
            confirm_phrase=self.confirm_phrase,
            workers=self.workers,
        )


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> PurgeSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated PurgeSettings object.

    Raises:
        SettingsNotFoundError: If the file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return PurgeSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> PurgeSettings:
    """Load settings, falling back to defaults when no file exists.

    An explicitly given path must exist.

    Raises:
        SettingsError: If the file is unreadable or invalid.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        if path is not None:
            raise
        return PurgeSettings()


def save_settings(settings: PurgeSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Destination. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    # None values have no TOML representation
    data = settings.model_dump(by_alias=True, exclude_none=True)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
