"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest
from dirpurge.models.candidate import Candidate
from dirpurge.models.config import ScanConfig

MB = 1024 * 1024


def _write_file(path: Path, size: int) -> Path:
    """Create a file of exactly ``size`` bytes, creating parents as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        f.write(b"x" * min(size, 4096))
        if size > 4096:
            f.truncate(size)
    return path


@pytest.fixture(autouse=True)
def isolated_xdg(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG config and data homes at a temporary directory.

    Keeps tests away from the real user trash and settings file.
    """
    home = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))
    return home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Project tree with one 12 MB node_modules and one excluded dist.

    Layout::

        root/a/node_modules/pkg/index.js  (12 MB)
        root/a/dist/node_modules/x.js     (1 KB, below an excluded dir)
        root/a/src/main.js                (100 B)
    """
    root = tmp_path / "root"
    _write_file(root / "a" / "node_modules" / "pkg" / "index.js", 12 * MB)
    _write_file(root / "a" / "dist" / "node_modules" / "x.js", 1024)
    _write_file(root / "a" / "src" / "main.js", 100)
    return root


@pytest.fixture
def scan_config() -> ScanConfig:
    """Scan config targeting node_modules and excluding dist."""
    return ScanConfig(targets=frozenset({"node_modules"}), excludes=frozenset({"dist"}))


@pytest.fixture
def make_candidate(tmp_path: Path) -> Callable[..., Candidate]:
    """Factory for candidates pointing at real directories under tmp_path."""

    def _make(
        name: str = "node_modules",
        parent: str = "project",
        size: int = 0,
        age_days: int | None = 10,
        create: bool = True,
    ) -> Candidate:
        path = tmp_path / parent / name
        if create:
            path.mkdir(parents=True, exist_ok=True)
            if size:
                _write_file(path / "blob.bin", size)
        return Candidate(
            path=path,
            name=name,
            size_bytes=size,
            age=timedelta(days=age_days) if age_days is not None else None,
            depth=2,
        )

    return _make


@pytest.fixture
def write_file() -> Callable[[Path, int], Path]:
    """Helper creating a file of a given size."""
    return _write_file
