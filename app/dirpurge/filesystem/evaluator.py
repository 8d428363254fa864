"""Directory size and age evaluation.

Walks a directory tree without following symlinks, summing regular file
sizes and tracking modification times. Unreadable entries are left out
of the total and mark the evaluation as partial.
"""

import logging
import os
import stat
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Measured properties of a directory.

    Attributes:
        size_bytes: Sum of regular file sizes (symlinks not followed).
        item_count: Number of entries below the directory.
        modified_at: Most recent modification time, None if unreadable.
        partial: True if some entries could not be read.
    """

    size_bytes: int
    item_count: int
    modified_at: datetime | None
    partial: bool


class SizeAgeEvaluator:
    """Computes size and age metadata for candidate directories.

    Args:
        track_contents_age: If True, age reflects the newest modification
            among the directory and everything below it. Otherwise only
            the directory's own mtime is used.
    """

    def __init__(self, *, track_contents_age: bool = False) -> None:
        self._track_contents_age = track_contents_age

    def evaluate(self, path: Path) -> Evaluation:
        """Measure a directory.

        Args:
            path: Directory to measure.

        Returns:
            Evaluation with size, item count, newest mtime and partial flag.
        """
        partial = False
        newest: float | None = None

        try:
            newest = path.lstat().st_mtime
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            partial = True

        total = 0
        count = 0
        stack: list[str] = [str(path)]

        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logger.debug("Cannot read %s: %s", current, e)
                partial = True
                continue

            for entry in entries:
                count += 1
                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    logger.debug("Cannot stat %s: %s", entry.path, e)
                    partial = True
                    continue

                if stat.S_ISREG(st.st_mode):
                    total += st.st_size
                elif stat.S_ISDIR(st.st_mode):
                    stack.append(entry.path)

                if self._track_contents_age and (newest is None or st.st_mtime > newest):
                    newest = st.st_mtime

        modified_at = datetime.fromtimestamp(newest, tz=UTC) if newest is not None else None
        return Evaluation(
            size_bytes=total,
            item_count=count,
            modified_at=modified_at,
            partial=partial,
        )


def age_since(modified_at: datetime | None, now: datetime | None = None) -> timedelta | None:
    """Elapsed time since a modification timestamp.

    Timestamps in the future (clock skew) yield a zero age.

    Args:
        modified_at: Modification time, or None if unknown.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        Non-negative timedelta, or None if the modification time is unknown.
    """
    if modified_at is None:
        return None
    reference = now or datetime.now(tz=UTC)
    return max(reference - modified_at, timedelta(0))
