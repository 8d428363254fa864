"""Resolved run configuration.

The command line and settings file are merged into these two immutable
structures before a run starts. Core components receive them explicitly
and never read ambient state.
"""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

DEFAULT_TARGETS: tuple[str, ...] = ("venv", ".venv", "node_modules", "target", "bin", "build")
DEFAULT_CONFIRM_PHRASE = "DELETE"
DEFAULT_BACKUP_DIR = Path("./backups")


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Traversal and filtering criteria.

    Attributes:
        targets: Directory names (or glob patterns) that mark a candidate.
        excludes: Directory names (or glob patterns) pruned from traversal.
        max_depth: Deepest level inspected below the root (0 = unlimited).
        follow_symlinks: Whether symlinked directories are traversed.
        min_size_bytes: Inclusive lower size bound (0 = no threshold).
        min_age: Inclusive lower age bound (None = no threshold).
    """

    targets: frozenset[str]
    excludes: frozenset[str] = frozenset()
    max_depth: int = 0
    follow_symlinks: bool = False
    min_size_bytes: int = 0
    min_age: timedelta | None = None

    def __post_init__(self) -> None:
        """Validate scan criteria after initialization."""
        if not self.targets:
            msg = "At least one target name is required"
            raise ValueError(msg)
        if self.max_depth < 0:
            msg = f"Depth must be >= 0, got {self.max_depth}"
            raise ValueError(msg)
        if self.min_size_bytes < 0:
            msg = f"Minimum size must be >= 0, got {self.min_size_bytes}"
            raise ValueError(msg)
        if self.min_age is not None and self.min_age < timedelta(0):
            msg = f"Minimum age must not be negative, got {self.min_age}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DeletionConfig:
    """What happens to selected directories.

    Attributes:
        delete: Whether deletion was requested at all (scan-only otherwise).
        dry_run: Plan everything but mutate nothing.
        assume_yes: Skip the confirmation phrase.
        use_trash: Move to trash instead of removing permanently.
        backup: Copy each directory to the backup dir first.
        archive: Zip each directory into the backup dir first.
        backup_dir: Destination for backups and archives.
        trash_dir: Trash location override (None = XDG trash).
        interactive: Ask for a keep/delete decision per candidate.
        confirm_phrase: Phrase the user must type to proceed.
        workers: Number of candidates executed concurrently.
    """

    delete: bool = False
    dry_run: bool = False
    assume_yes: bool = False
    use_trash: bool = True
    backup: bool = False
    archive: bool = False
    backup_dir: Path = DEFAULT_BACKUP_DIR
    trash_dir: Path | None = None
    interactive: bool = False
    confirm_phrase: str = DEFAULT_CONFIRM_PHRASE
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate deletion options after initialization."""
        if not self.confirm_phrase:
            msg = "Confirmation phrase cannot be empty"
            raise ValueError(msg)
        if self.workers < 1:
            msg = f"Workers must be >= 1, got {self.workers}"
            raise ValueError(msg)

    @property
    def executes(self) -> bool:
        """Check if the run goes past scanning (real or simulated deletion)."""
        return self.delete or self.dry_run

    @property
    def preserves(self) -> bool:
        """Check if backups or archives are written before deletion."""
        return self.backup or self.archive

    @property
    def requires_confirmation(self) -> bool:
        """Check if the confirmation phrase gates execution."""
        return self.delete and not self.dry_run and not self.assume_yes
