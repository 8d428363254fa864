"""JSON and CSV export of run results.

Exports use :meth:`Outcome.to_record` as their row shape. Scan-only runs
export candidates in the same shape with an empty action list.
"""

import csv
import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from dirpurge.core.report import RunReport
from dirpurge.models.candidate import Candidate

logger = logging.getLogger(__name__)

CSV_COLUMNS: tuple[str, ...] = (
    "path",
    "size_bytes",
    "size_partial",
    "age_days",
    "item_count",
    "actions",
    "status",
    "error",
)


class ExportError(Exception):
    """Raised when an export file cannot be written."""


def candidate_record(candidate: Candidate) -> dict[str, Any]:
    """Record for a candidate that was found but not executed."""
    return {
        "path": str(candidate.path),
        "size_bytes": candidate.size_bytes,
        "size_partial": candidate.size_partial,
        "age_days": candidate.age_days,
        "item_count": candidate.item_count,
        "actions": [],
        "status": None,
        "error": None,
    }


def build_records(
    report: RunReport | None = None,
    candidates: Sequence[Candidate] = (),
) -> list[dict[str, Any]]:
    """Collect export rows from outcomes, or from candidates when none ran."""
    if report is not None and report.outcomes:
        return [outcome.to_record() for outcome in report.outcomes]
    return [candidate_record(c) for c in candidates]


def export_json(
    path: Path,
    root: Path,
    records: list[dict[str, Any]],
    report: RunReport | None = None,
) -> Path:
    """Write a JSON document with summary and per-directory records.

    Args:
        path: Output file.
        root: Scanned root directory.
        records: Rows from :func:`build_records`.
        report: Run report supplying the summary, if the run executed.

    Returns:
        The resolved output path.

    Raises:
        ExportError: If the file cannot be written.
    """
    document: dict[str, Any] = {
        "generated_at": datetime.now(tz=UTC).isoformat(),
        "root": str(root),
        "total_size_bytes": sum(r["size_bytes"] for r in records),
        "count": len(records),
        "summary": report.summary.to_dict() if report is not None else None,
        "directories": records,
    }
    if report is not None and report.warnings:
        document["warnings"] = [{"path": w.path, "message": w.message} for w in report.warnings]

    return _write(path, json.dumps(document, indent=2))


def export_csv(path: Path, records: list[dict[str, Any]]) -> Path:
    """Write one CSV row per directory.

    The actions column lists ``action:status`` pairs separated by ``;``.

    Raises:
        ExportError: If the file cannot be written.
    """
    export_path = _prepare(path)
    try:
        with export_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for record in records:
                row = dict(record)
                row["actions"] = ";".join(f"{a['action']}:{a['status']}" for a in record["actions"])
                writer.writerow(row)
    except OSError as e:
        raise ExportError(f"Failed to write {export_path}: {e}") from e
    logger.info("Saved CSV summary to %s", export_path)
    return export_path


def _prepare(path: Path) -> Path:
    export_path = path.expanduser().resolve()
    if export_path.is_dir():
        raise ExportError(f"Export path is a directory: {export_path}")
    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create {export_path.parent}: {e}") from e
    return export_path


def _write(path: Path, content: str) -> Path:
    export_path = _prepare(path)
    try:
        export_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {export_path}: {e}") from e
    logger.info("Saved JSON summary to %s", export_path)
    return export_path
