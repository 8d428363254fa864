"""Filesystem access for dirpurge.

This module provides directory scanning, size and age evaluation,
and the trash used as the default deletion target.
"""

from dirpurge.filesystem.evaluator import Evaluation, SizeAgeEvaluator, age_since
from dirpurge.filesystem.scanner import DirectoryScanner
from dirpurge.filesystem.trash import Trash, TrashEntry, TrashError

__all__ = [
    "DirectoryScanner",
    "Evaluation",
    "SizeAgeEvaluator",
    "Trash",
    "TrashEntry",
    "TrashError",
    "age_since",
]
