"""Shared Rich display functions for candidates and outcomes."""

from collections.abc import Sequence

from rich.table import Table

from dirpurge.core.report import RunReport
from dirpurge.models.candidate import Candidate
from dirpurge.models.outcome import Outcome, OutcomeStatus, StepStatus
from dirpurge.models.plan import ActionType
from dirpurge.utils.formatting import (
    console,
    format_age,
    format_size,
    print_info,
    print_success,
    print_warning,
)

_ACTION_STYLES: dict[ActionType, str] = {
    ActionType.BACKUP: "preserved",
    ActionType.ARCHIVE: "preserved",
    ActionType.TRASH: "trashed",
    ActionType.REMOVE: "removed",
}

_STATUS_LABELS: dict[OutcomeStatus, str] = {
    OutcomeStatus.COMPLETED: "[success]done[/]",
    OutcomeStatus.PARTIALLY_FAILED: "[error]failed[/]",
    OutcomeStatus.SKIPPED: "[warning]skipped[/]",
    OutcomeStatus.DRY_RUN: "[dry_run]dry-run[/]",
}


def create_candidates_table(
    candidates: Sequence[Candidate],
    title: str = "Matching Directories",
) -> Table:
    """Create a Rich table listing candidates.

    Args:
        candidates: Candidates to display.
        title: Table title.

    Returns:
        Rich Table with path, size, age and item count columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted", width=4)
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Size", justify="right", style="info")
    table.add_column("Age", justify="right")
    table.add_column("Items", justify="right", style="muted")

    for index, candidate in enumerate(candidates, start=1):
        size = format_size(candidate.size_bytes)
        if candidate.size_partial:
            size = f"~{size}"
        table.add_row(
            str(index),
            str(candidate.path),
            size,
            format_age(candidate.age),
            str(candidate.item_count),
        )

    return table


def format_steps(outcome: Outcome) -> str:
    """Render the action sequence with per-step markers."""
    parts: list[str] = []
    for step in outcome.steps:
        style = _ACTION_STYLES[step.action_type]
        name = step.action_type.value
        if step.status == StepStatus.FAILED:
            parts.append(f"[error]{name}![/]")
        elif step.status == StepStatus.SKIPPED:
            parts.append(f"[muted]{name}?[/]")
        else:
            parts.append(f"[{style}]{name}[/]")
    return " > ".join(parts) or "-"


def create_outcomes_table(outcomes: Sequence[Outcome], dry_run: bool = False) -> Table:
    """Create a Rich table displaying per-directory results.

    Args:
        outcomes: Outcomes to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table with status, path, actions and details columns.
    """
    table = Table(
        title="Planned Actions (Dry Run)" if dry_run else "Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=9, justify="center")
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Size", justify="right", style="info")
    table.add_column("Actions")
    table.add_column("Details", style="muted", overflow="fold")

    for outcome in outcomes:
        table.add_row(
            _STATUS_LABELS[outcome.status],
            str(outcome.candidate.path),
            format_size(outcome.candidate.size_bytes),
            format_steps(outcome),
            outcome.error or "",
        )

    return table


def print_candidates_summary(candidates: Sequence[Candidate]) -> None:
    """Print the number and total size of candidates."""
    total = sum(c.size_bytes for c in candidates)
    console.print(
        f"\n[dim]Found {len(candidates)} matching director"
        f"{'y' if len(candidates) == 1 else 'ies'} ({format_size(total)} total)[/dim]"
    )


def print_run_summary(report: RunReport) -> None:
    """Print the final totals of a run."""
    summary = report.summary

    if summary.aborted:
        print_warning(f"Aborted: {summary.abort_reason}. Nothing was deleted.")
        return

    if summary.filtered:
        print_info(f"{summary.filtered} director(ies) below the size/age threshold.")
    if summary.declined:
        print_info(f"{summary.declined} director(ies) kept by selection.")
    if summary.scan_warnings:
        print_warning(f"{summary.scan_warnings} unreadable entr(ies) skipped during scan.")

    if summary.dry_run:
        print_info(
            f"Dry-run: {summary.dry_run} director(ies) would be processed, "
            f"{format_size(summary.bytes_reclaimable)} reclaimable."
        )
        return

    if summary.partially_failed or summary.skipped:
        print_warning(
            f"{summary.completed} completed, {summary.partially_failed} failed, "
            f"{summary.skipped} skipped. {format_size(summary.bytes_freed)} freed."
        )
    elif summary.completed:
        print_success(
            f"All {summary.completed} director(ies) processed. "
            f"{format_size(summary.bytes_freed)} freed."
        )
    else:
        print_info("No directories selected for deletion.")
