"""Execution outcome and run summary models.

Outcomes are produced by the executor and consumed by the report
aggregator. Their ``to_record`` shape is what JSON/CSV exporters rely on.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dirpurge.models.candidate import Candidate
from dirpurge.models.plan import ActionType


class StepStatus(str, Enum):
    """Result of a single plan step."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"


class OutcomeStatus(str, Enum):
    """Final status of a candidate.

    Attributes:
        COMPLETED: Every step succeeded.
        PARTIALLY_FAILED: The terminal step was not reached or failed.
            Original data is still in place unless the terminal step succeeded.
        SKIPPED: Never executed (cancelled before it started).
        DRY_RUN: Planned but not executed.
    """

    COMPLETED = "completed"
    PARTIALLY_FAILED = "partially_failed"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"


@dataclass(frozen=True, slots=True)
class StepResult:
    """Result of executing one planned action.

    Attributes:
        action_type: The action that ran (or was skipped).
        status: How it ended.
        target: Where the data went (backup path, archive file, trash entry).
        error: Error message if the step failed or was skipped for a reason.
    """

    action_type: ActionType
    status: StepStatus
    target: Path | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the step succeeded."""
        return self.status == StepStatus.SUCCEEDED


@dataclass(frozen=True, slots=True)
class Outcome:
    """Per-candidate execution record.

    Attributes:
        candidate: The directory that was processed.
        steps: Result of every planned step, in plan order.
        status: Final status.
        error: First error encountered, if any.
    """

    candidate: Candidate
    steps: tuple[StepResult, ...]
    status: OutcomeStatus
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the outcome should fail the process exit status."""
        return self.status == OutcomeStatus.PARTIALLY_FAILED

    @property
    def terminal_step(self) -> StepResult | None:
        """Result of the trash/remove step, if the plan had one."""
        for step in reversed(self.steps):
            if step.action_type.is_terminal:
                return step
        return None

    def to_record(self) -> dict[str, Any]:
        """Serialize to the flat record exporters consume.

        Returns:
            Dictionary with candidate path, size, age, action sequence,
            final status and error detail.
        """
        return {
            "path": str(self.candidate.path),
            "size_bytes": self.candidate.size_bytes,
            "size_partial": self.candidate.size_partial,
            "age_days": self.candidate.age_days,
            "item_count": self.candidate.item_count,
            "actions": [
                {
                    "action": step.action_type.value,
                    "status": step.status.value,
                    "target": str(step.target) if step.target is not None else None,
                    "error": step.error,
                }
                for step in self.steps
            ],
            "status": self.status.value,
            "error": self.error,
        }


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Totals for one run.

    Contains no timestamps so that identical dry-runs summarize identically.

    Attributes:
        found: Candidates discovered by the scanner.
        selected: Candidates that passed the selection gate.
        filtered: Candidates dropped by size/age thresholds.
        declined: Candidates kept by the interactive decision.
        bytes_freed: Bytes of completed candidates.
        bytes_reclaimable: Bytes of dry-run candidates.
        completed: Outcomes with status completed.
        partially_failed: Outcomes with status partially_failed.
        skipped: Outcomes with status skipped.
        dry_run: Outcomes with status dry_run.
        scan_warnings: Unreadable entries encountered while scanning.
        aborted: Whether the run stopped before execution.
        abort_reason: Why the run stopped.
    """

    found: int = 0
    selected: int = 0
    filtered: int = 0
    declined: int = 0
    bytes_freed: int = 0
    bytes_reclaimable: int = 0
    completed: int = 0
    partially_failed: int = 0
    skipped: int = 0
    dry_run: int = 0
    scan_warnings: int = 0
    aborted: bool = False
    abort_reason: str | None = None

    @property
    def has_failures(self) -> bool:
        """Check if the run must exit non-zero."""
        return self.aborted or self.partially_failed > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for export."""
        return asdict(self)
