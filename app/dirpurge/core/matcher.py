"""Directory name matching against target and exclusion sets.

Entries are exact names unless they contain glob metacharacters, in
which case they are matched with fnmatch. Exclusions always win.
"""

import fnmatch
from collections.abc import Iterable

_GLOB_CHARS = frozenset("*?[")


def _is_pattern(entry: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in entry)


class NameSet:
    """A set of names and glob patterns with fast exact lookup."""

    def __init__(self, entries: Iterable[str]) -> None:
        names: set[str] = set()
        patterns: list[str] = []
        for entry in entries:
            if not entry:
                continue
            if _is_pattern(entry):
                patterns.append(entry)
            else:
                names.add(entry)
        self._names = frozenset(names)
        self._patterns = tuple(patterns)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if name in self._names:
            return True
        return any(fnmatch.fnmatchcase(name, p) for p in self._patterns)

    def __bool__(self) -> bool:
        return bool(self._names or self._patterns)


class PathMatcher:
    """Pure predicate deciding whether a directory name is a target.

    Args:
        targets: Names or patterns marking candidate directories.
        excludes: Names or patterns pruned from traversal.
    """

    def __init__(self, targets: Iterable[str], excludes: Iterable[str] = ()) -> None:
        self._targets = NameSet(targets)
        self._excludes = NameSet(excludes)

    def is_excluded(self, name: str) -> bool:
        """Check if a directory name is in the exclusion set."""
        return name in self._excludes

    def matches(self, name: str) -> bool:
        """Check if a directory name is a target and not excluded.

        Args:
            name: Directory basename.

        Returns:
            True if the name matches a target and no exclusion.
        """
        if self.is_excluded(name):
            return False
        return name in self._targets
