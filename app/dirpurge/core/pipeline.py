"""Scan, select, plan, execute and report in one run.

This is the entry point shared by the ``scan`` and ``clean`` commands.
Run-level problems raise :class:`RunAbortError` before anything on disk
changes; per-candidate problems end up in that candidate's outcome.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from dirpurge.core.errors import PlanningError, RunAbortError
from dirpurge.core.executor import DeletionExecutor, skipped_outcome
from dirpurge.core.paths import is_writable_dir
from dirpurge.core.planner import DeletionPlanner
from dirpurge.core.report import ReportAggregator, RunReport
from dirpurge.core.selection import Confirmer, Decider, SelectionGate
from dirpurge.filesystem.scanner import DirectoryScanner
from dirpurge.filesystem.trash import Trash
from dirpurge.models.outcome import Outcome, OutcomeStatus

if TYPE_CHECKING:
    from dirpurge.models.candidate import Candidate, ScanWarning
    from dirpurge.models.config import DeletionConfig, ScanConfig
    from dirpurge.models.plan import ActionPlan

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"


def validate_root(root: Path) -> Path:
    """Resolve the scan root.

    Args:
        root: Directory to scan.

    Returns:
        Absolute, resolved root.

    Raises:
        RunAbortError: If the root does not exist or is not a directory.
    """
    resolved = root.expanduser().resolve()
    if not resolved.exists():
        raise RunAbortError(f"Path does not exist: {root}")
    if not resolved.is_dir():
        raise RunAbortError(f"Path is not a directory: {root}")
    return resolved


def check_destinations(config: DeletionConfig, trash: Trash) -> None:
    """Verify backup and trash locations before any mutation.

    Args:
        config: Deletion options.
        trash: Trash that will receive trashed directories.

    Raises:
        RunAbortError: If a required destination is not writable.
    """
    if config.preserves and not is_writable_dir(config.backup_dir):
        raise RunAbortError(f"Backup directory is not writable: {config.backup_dir}")
    if config.use_trash:
        try:
            trash.ensure()
        except RuntimeError as e:
            raise RunAbortError(f"Trash is not writable: {e}") from e


class PurgeRun:
    """One scan-filter-decide-delete run.

    Args:
        scan_config: Traversal and threshold criteria.
        deletion_config: What to do with selected directories.
        decider: Interactive decision provider (used when interactive).
        confirmer: Confirmation provider (used when confirmation is required).
        cancel: Event checked between candidates.
        trash: Trash override (defaults to ``deletion_config.trash_dir``).
        on_outcome: Called after each candidate finishes.
    """

    def __init__(
        self,
        scan_config: ScanConfig,
        deletion_config: DeletionConfig,
        *,
        decider: Decider | None = None,
        confirmer: Confirmer | None = None,
        cancel: threading.Event | None = None,
        trash: Trash | None = None,
        on_outcome: Callable[[Outcome], None] | None = None,
    ) -> None:
        self._scan_config = scan_config
        self._config = deletion_config
        self._decider = decider
        self._confirmer = confirmer
        self._cancel = cancel or threading.Event()
        self._trash = trash if trash is not None else Trash(deletion_config.trash_dir)
        self._on_outcome = on_outcome

    def scan(self, root: Path) -> tuple[list[Candidate], DirectoryScanner]:
        """Discover candidates below a root.

        Raises:
            RunAbortError: If the root is invalid.
        """
        scanner = DirectoryScanner(self._scan_config)
        candidates = list(scanner.scan(validate_root(root)))
        logger.info("Found %d matching directories", len(candidates))
        return candidates, scanner

    def run(self, root: Path) -> RunReport:
        """Execute the whole pipeline.

        Args:
            root: Directory to scan.

        Returns:
            RunReport with summary, ordered outcomes and scan warnings.

        Raises:
            RunAbortError: On run-level errors, before any mutation.
        """
        candidates, scanner = self.scan(root)
        return self.process(candidates, scanner.warnings)

    def process(
        self,
        candidates: Sequence[Candidate],
        warnings: Sequence[ScanWarning] = (),
    ) -> RunReport:
        """Select, plan and execute already discovered candidates.

        Args:
            candidates: Candidates in discovery order.
            warnings: Scan warnings to carry into the report.

        Returns:
            RunReport with summary and ordered outcomes.

        Raises:
            RunAbortError: If a destination is unusable, before any mutation.
        """
        aggregator = ReportAggregator()

        executes = self._config.executes
        gate = SelectionGate(
            self._scan_config,
            decider=self._decider if executes and self._config.interactive else None,
            confirmer=self._confirmer,
            require_confirmation=self._config.requires_confirmation,
            confirm_phrase=self._config.confirm_phrase,
        )
        selection = gate.select(candidates)
        aggregator.record_scan(
            found=len(candidates),
            selected=len(selection.selected),
            filtered=len(selection.filtered),
            declined=len(selection.declined),
            warnings=warnings,
        )

        if selection.aborted:
            aggregator.abort(selection.abort_reason or "Aborted")
            return aggregator.finalize()

        if executes:
            if selection.selected and not self._config.dry_run:
                check_destinations(self._config, self._trash)
            self._execute(selection.selected, aggregator)

        return aggregator.finalize()

    def _execute(self, selected: tuple[Candidate, ...], aggregator: ReportAggregator) -> None:
        """Plan and execute every selected candidate."""
        planner = DeletionPlanner(self._config)
        executor = DeletionExecutor(self._config, trash=self._trash)

        plans: list[tuple[int, Candidate, ActionPlan | None, str | None]] = []
        for index, candidate in enumerate(selected):
            try:
                plans.append((index, candidate, planner.plan(candidate), None))
            except PlanningError as e:
                logger.error("Cannot plan %s: %s", candidate.path, e)
                plans.append((index, candidate, None, str(e)))

        def process(item: tuple[int, Candidate, ActionPlan | None, str | None]) -> None:
            index, candidate, plan, planning_error = item
            if self._cancel.is_set():
                outcome = skipped_outcome(candidate, plan, CANCELLED, OutcomeStatus.SKIPPED)
            elif plan is None:
                outcome = skipped_outcome(
                    candidate, None, planning_error, OutcomeStatus.PARTIALLY_FAILED
                )
            else:
                outcome = executor.execute(plan)
            aggregator.add(outcome, order=index)
            if self._on_outcome is not None:
                self._on_outcome(outcome)

        if self._config.workers > 1 and len(plans) > 1:
            with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
                for future in [pool.submit(process, item) for item in plans]:
                    future.result()
        else:
            for item in plans:
                process(item)
