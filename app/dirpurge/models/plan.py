"""Action plan models.

An ActionPlan lists what happens to one selected directory, in order:
optional backup and archive steps followed by exactly one terminal step.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dirpurge.models.candidate import Candidate


class ActionType(str, Enum):
    """Type of step in an action plan.

    Attributes:
        BACKUP: Verbatim recursive copy into the backup dir.
        ARCHIVE: Zip archive written into the backup dir.
        TRASH: Move into the trash (recoverable, terminal).
        REMOVE: Permanent recursive deletion (terminal).
    """

    BACKUP = "backup"
    ARCHIVE = "archive"
    TRASH = "trash"
    REMOVE = "remove"

    @property
    def is_terminal(self) -> bool:
        """Check if this action ends a plan."""
        return self in (ActionType.TRASH, ActionType.REMOVE)


@dataclass(frozen=True, slots=True)
class PlannedAction:
    """A single planned step.

    Attributes:
        action_type: What to do.
        target: Destination path for backup/archive steps, None otherwise.
    """

    action_type: ActionType
    target: Path | None = None


@dataclass(frozen=True, slots=True)
class ActionPlan:
    """Ordered steps for one candidate.

    Attributes:
        candidate: Directory the plan applies to.
        actions: Steps in execution order; the last one is terminal.
    """

    candidate: Candidate
    actions: tuple[PlannedAction, ...]

    def __post_init__(self) -> None:
        """Enforce a single trailing terminal action."""
        if not self.actions:
            msg = "Action plan cannot be empty"
            raise ValueError(msg)
        terminal = [a for a in self.actions if a.action_type.is_terminal]
        if len(terminal) != 1:
            msg = f"Action plan needs exactly one terminal action, got {len(terminal)}"
            raise ValueError(msg)
        if not self.actions[-1].action_type.is_terminal:
            msg = "Terminal action must be the last step"
            raise ValueError(msg)

    @property
    def terminal(self) -> PlannedAction:
        """The trash or remove step."""
        return self.actions[-1]

    @property
    def preserving(self) -> tuple[PlannedAction, ...]:
        """Backup and archive steps preceding the terminal action."""
        return self.actions[:-1]
