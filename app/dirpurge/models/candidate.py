"""Candidate directories discovered during scanning."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Candidate:
    """A directory whose name matched the target set.

    Attributes:
        path: Absolute path of the directory at discovery time.
        name: Directory name (basename).
        size_bytes: Recursive size of regular files in bytes.
        age: Time since the most recent modification (None if unknown).
        depth: Traversal depth, the scan root being depth 0.
        item_count: Number of entries below the directory.
        size_partial: True if some entries could not be measured.
        modified_at: Most recent modification time (None if unknown).
    """

    path: Path
    name: str
    size_bytes: int
    age: timedelta | None
    depth: int
    item_count: int = 0
    size_partial: bool = False
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path.is_absolute():
            msg = f"Candidate path must be absolute: {self.path}"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def age_days(self) -> int | None:
        """Whole days since last modification."""
        if self.age is None:
            return None
        return self.age.days

    @property
    def size_mb(self) -> float:
        """Size in mebibytes."""
        return self.size_bytes / 1024 / 1024


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """An entry the scanner could not read; its subtree was skipped.

    Attributes:
        path: Path that failed.
        message: Error description.
    """

    path: str
    message: str
