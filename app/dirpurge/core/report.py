"""Run report aggregation.

Collects outcomes into a RunSummary. Writes are serialized with a lock
so executor workers can report concurrently; the summary and outcome
list are readable only after :meth:`ReportAggregator.finalize`.
"""

import threading
from collections.abc import Sequence
from dataclasses import dataclass

from dirpurge.models.candidate import ScanWarning
from dirpurge.models.outcome import Outcome, OutcomeStatus, RunSummary


@dataclass(frozen=True, slots=True)
class RunReport:
    """Everything a run hands to exporters and the CLI.

    Attributes:
        summary: Finalized totals.
        outcomes: Outcome records in discovery order.
        warnings: Scan warnings.
    """

    summary: RunSummary
    outcomes: tuple[Outcome, ...]
    warnings: tuple[ScanWarning, ...] = ()

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 on any partial failure or abort."""
        return 1 if self.summary.has_failures else 0


class ReportAggregator:
    """Append-only accumulator for one run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[tuple[int, Outcome]] = []
        self._warnings: list[ScanWarning] = []
        self._found = 0
        self._selected = 0
        self._filtered = 0
        self._declined = 0
        self._aborted = False
        self._abort_reason: str | None = None
        self._summary: RunSummary | None = None
        self._outcomes: tuple[Outcome, ...] = ()

    def record_scan(
        self,
        *,
        found: int,
        selected: int,
        filtered: int = 0,
        declined: int = 0,
        warnings: Sequence[ScanWarning] = (),
    ) -> None:
        """Record scan and selection totals."""
        with self._lock:
            self._check_open()
            self._found = found
            self._selected = selected
            self._filtered = filtered
            self._declined = declined
            self._warnings = list(warnings)

    def add(self, outcome: Outcome, order: int | None = None) -> None:
        """Append an outcome.

        Args:
            outcome: Outcome to record.
            order: Position in discovery order. Defaults to arrival order.
        """
        with self._lock:
            self._check_open()
            position = order if order is not None else len(self._entries)
            self._entries.append((position, outcome))

    def abort(self, reason: str) -> None:
        """Mark the run as aborted before execution."""
        with self._lock:
            self._check_open()
            self._aborted = True
            self._abort_reason = reason

    def finalize(self) -> RunReport:
        """Close the aggregator and compute the summary.

        Returns:
            RunReport with the summary and ordered outcomes.
        """
        with self._lock:
            self._check_open()
            self._entries.sort(key=lambda entry: entry[0])
            self._outcomes = tuple(outcome for _, outcome in self._entries)

            counts = dict.fromkeys(OutcomeStatus, 0)
            freed = 0
            reclaimable = 0
            for outcome in self._outcomes:
                counts[outcome.status] += 1
                if outcome.status == OutcomeStatus.COMPLETED:
                    freed += outcome.candidate.size_bytes
                elif outcome.status == OutcomeStatus.DRY_RUN:
                    reclaimable += outcome.candidate.size_bytes

            self._summary = RunSummary(
                found=self._found,
                selected=self._selected,
                filtered=self._filtered,
                declined=self._declined,
                bytes_freed=freed,
                bytes_reclaimable=reclaimable,
                completed=counts[OutcomeStatus.COMPLETED],
                partially_failed=counts[OutcomeStatus.PARTIALLY_FAILED],
                skipped=counts[OutcomeStatus.SKIPPED],
                dry_run=counts[OutcomeStatus.DRY_RUN],
                scan_warnings=len(self._warnings),
                aborted=self._aborted,
                abort_reason=self._abort_reason,
            )
            return RunReport(
                summary=self._summary,
                outcomes=self._outcomes,
                warnings=tuple(self._warnings),
            )

    @property
    def summary(self) -> RunSummary:
        """The finalized summary.

        Raises:
            RuntimeError: If the run has not been finalized yet.
        """
        with self._lock:
            if self._summary is None:
                msg = "Run summary is not available before finalize()"
                raise RuntimeError(msg)
            return self._summary

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        """Outcomes in discovery order.

        Raises:
            RuntimeError: If the run has not been finalized yet.
        """
        with self._lock:
            if self._summary is None:
                msg = "Outcomes are not available before finalize()"
                raise RuntimeError(msg)
            return self._outcomes

    def _check_open(self) -> None:
        if self._summary is not None:
            msg = "Report has already been finalized"
            raise RuntimeError(msg)
