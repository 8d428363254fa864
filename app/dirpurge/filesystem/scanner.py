"""Directory scanner for purge candidates.

Walks the tree below a root directory depth-first and yields every
directory whose name matches the target set. Matched directories are
not descended into, so candidates never nest. Unreadable subtrees are
recorded as warnings and skipped without aborting the scan.
"""

import logging
import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from dirpurge.core.matcher import PathMatcher
from dirpurge.filesystem.evaluator import SizeAgeEvaluator, age_since
from dirpurge.models.candidate import Candidate, ScanWarning
from dirpurge.models.config import ScanConfig

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Finds candidate directories below a root.

    The root itself is depth 0 and is never a candidate. With a depth
    limit D, entries at depth D are still inspected (and emitted if they
    match) but nothing below them is visited.

    Args:
        config: Scan criteria.
        evaluator: Size/age evaluator. Defaults to one that tracks
            contents age only when a minimum age is configured.
        clock: Returns the reference time for age computation.
    """

    def __init__(
        self,
        config: ScanConfig,
        *,
        evaluator: SizeAgeEvaluator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._matcher = PathMatcher(config.targets, config.excludes)
        self._evaluator = evaluator or SizeAgeEvaluator(
            track_contents_age=config.min_age is not None
        )
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._warnings: list[ScanWarning] = []
        self._visited: set[tuple[int, int]] = set()

    @property
    def warnings(self) -> list[ScanWarning]:
        """Warnings recorded during the most recent scan."""
        return list(self._warnings)

    def scan(self, root: Path) -> Iterator[Candidate]:
        """Scan a root directory and yield candidates.

        Each call starts from scratch: warnings and the visited set are
        reset.

        Args:
            root: Directory to scan.

        Yields:
            Candidate for each matching directory, in traversal order.
        """
        self._warnings = []
        self._visited = set()
        now = self._clock()

        root = root.resolve()
        try:
            st = root.stat()
        except OSError as e:
            self._warn(str(root), e)
            return
        self._visited.add((st.st_dev, st.st_ino))

        yield from self._walk(root, 1, now)

    def _walk(self, directory: Path, depth: int, now: datetime) -> Iterator[Candidate]:
        """Visit the entries of one directory at the given depth."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._warn(str(directory), e)
            return

        for entry in entries:
            try:
                is_link = entry.is_symlink()
                if not entry.is_dir(follow_symlinks=True):
                    continue
            except OSError as e:
                self._warn(entry.path, e)
                continue

            if is_link and not self._config.follow_symlinks:
                logger.debug("Skipping symlink: %s", entry.path)
                continue

            name = entry.name
            if self._matcher.is_excluded(name):
                logger.debug("Excluding directory: %s", entry.path)
                continue

            path = Path(entry.path)
            matched = self._matcher.matches(name)
            if is_link:
                # Candidates are always real directories.
                path = path.resolve()
                if matched and not self._matcher.matches(path.name):
                    # The directory behind the link must itself be a target.
                    logger.warning(
                        "Skipping %s: link target %s is not a target directory", entry.path, path
                    )
                    continue

            try:
                st = path.stat()
            except OSError as e:
                self._warn(entry.path, e)
                continue
            key = (st.st_dev, st.st_ino)
            if key in self._visited:
                logger.debug("Already visited: %s", entry.path)
                continue
            self._visited.add(key)

            if matched:
                logger.debug("Found matching directory: %s", path)
                yield self._make_candidate(path, name, depth, now)
                continue

            if self._config.max_depth and depth >= self._config.max_depth:
                continue

            yield from self._walk(path, depth + 1, now)

    def _make_candidate(self, path: Path, name: str, depth: int, now: datetime) -> Candidate:
        """Build a candidate decorated with size and age."""
        evaluation = self._evaluator.evaluate(path)
        if evaluation.partial:
            logger.warning("Size of %s is a partial estimate (unreadable entries)", path)
        return Candidate(
            path=path,
            name=name,
            size_bytes=evaluation.size_bytes,
            age=age_since(evaluation.modified_at, now),
            depth=depth,
            item_count=evaluation.item_count,
            size_partial=evaluation.partial,
            modified_at=evaluation.modified_at,
        )

    def _warn(self, path: str, error: OSError) -> None:
        """Record an unreadable entry."""
        message = error.strerror or str(error)
        logger.warning("Cannot read %s: %s", path, message)
        self._warnings.append(ScanWarning(path=path, message=message))
