"""Exception hierarchy for the deletion pipeline.

Per-candidate errors (planning, execution) are caught and turned into
outcome records. Run-level errors abort before anything is mutated.
"""


class DirpurgeError(Exception):
    """Base exception for dirpurge errors."""


class RunAbortError(DirpurgeError):
    """Raised when a run cannot start safely (bad root, unwritable backup dir)."""


class PlanningError(DirpurgeError):
    """Raised when a collision-free backup or archive path cannot be found."""


class ExecutionError(DirpurgeError):
    """Raised by an executor step when a filesystem action fails."""
