"""Clean command: scan, select and remove matching directories.

Without ``--delete`` or ``--dry-run`` the command only lists what it
found. Deletion asks for the confirmation phrase unless ``--yes`` is
given; a mismatch aborts with nothing changed. The exit status is 1 if
any directory could not be fully processed.
"""

import signal
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from dirpurge.cli.display import (
    create_candidates_table,
    create_outcomes_table,
    print_candidates_summary,
    print_run_summary,
)
from dirpurge.cli.options import (
    ConfigOpt,
    CsvOpt,
    DepthOpt,
    ExcludeOpt,
    FollowSymlinksOpt,
    JsonOpt,
    MinAgeOpt,
    MinSizeOpt,
    RootArg,
    SaveConfigOpt,
    TargetOpt,
    resolve_settings,
)
from dirpurge.cli.prompts import PromptConfirmer, PromptDecider
from dirpurge.core.errors import RunAbortError
from dirpurge.core.export import ExportError, build_records, export_csv, export_json
from dirpurge.core.pipeline import PurgeRun
from dirpurge.core.report import RunReport
from dirpurge.core.selection import passes_thresholds
from dirpurge.core.settings import PurgeSettings
from dirpurge.models.candidate import Candidate
from dirpurge.utils.formatting import console, print_error, print_info, print_warning


def clean(
    ctx: typer.Context,
    root: RootArg,
    target: TargetOpt = None,
    exclude: ExcludeOpt = None,
    depth: DepthOpt = None,
    min_size: MinSizeOpt = None,
    min_age: MinAgeOpt = None,
    follow_symlinks: FollowSymlinksOpt = None,
    delete: Annotated[
        bool | None,
        typer.Option("--delete", help="Perform deletion."),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option("--dry-run", "-d", help="Simulate operations without making changes."),
    ] = None,
    yes: Annotated[
        bool | None,
        typer.Option("--yes", "-y", help="Skip the confirmation phrase."),
    ] = None,
    use_trash: Annotated[
        bool | None,
        typer.Option(
            "--use-trash/--no-trash",
            help="Move to trash (default) or delete permanently.",
        ),
    ] = None,
    backup: Annotated[
        bool | None,
        typer.Option("--backup", "-b", help="Copy directories to the backup dir first."),
    ] = None,
    archive: Annotated[
        bool | None,
        typer.Option("--archive", "-a", help="Zip directories into the backup dir first."),
    ] = None,
    backup_dir: Annotated[
        Path | None,
        typer.Option("--backup-dir", help="Directory for backups and archives."),
    ] = None,
    trash_dir: Annotated[
        Path | None,
        typer.Option("--trash-dir", help="Trash location (default: XDG user trash)."),
    ] = None,
    interactive: Annotated[
        bool | None,
        typer.Option("--interactive", "-i", help="Select directories interactively."),
    ] = None,
    confirm_phrase: Annotated[
        str | None,
        typer.Option("--confirm-phrase", help="Phrase to type to confirm deletion."),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", min=1, max=64, help="Directories processed in parallel."),
    ] = None,
    config: ConfigOpt = None,
    save_config: SaveConfigOpt = None,
    json_path: JsonOpt = None,
    csv_path: CsvOpt = None,
) -> None:
    """Find matching directories and delete, trash, back up or archive them."""
    settings = resolve_settings(
        ctx,
        config,
        {
            "targets": target,
            "excludes": exclude,
            "depth": depth,
            "min_size_mb": min_size,
            "min_age_days": min_age,
            "follow_symlinks": follow_symlinks,
            "delete": delete,
            "dry_run": dry_run,
            "yes": yes,
            "use_trash": use_trash,
            "backup": backup,
            "archive": archive,
            "backup_dir": str(backup_dir) if backup_dir else None,
            "trash_dir": str(trash_dir) if trash_dir else None,
            "interactive": interactive,
            "confirm_phrase": confirm_phrase,
            "workers": workers,
            "json_path": str(json_path) if json_path else None,
            "csv_path": str(csv_path) if csv_path else None,
        },
        save_config,
    )
    scan_config = settings.to_scan_config()
    deletion_config = settings.to_deletion_config()

    cancel = threading.Event()
    decider = PromptDecider()
    run = PurgeRun(
        scan_config,
        deletion_config,
        decider=decider,
        confirmer=PromptConfirmer(permanent=not deletion_config.use_trash),
        cancel=cancel,
    )

    try:
        candidates, scanner = run.scan(root)
    except RunAbortError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for warning in scanner.warnings:
        print_warning(f"Cannot read {warning.path}: {warning.message}")

    if not candidates:
        print_info("No matching directories found.")
        return

    console.print(create_candidates_table(candidates))
    print_candidates_summary(candidates)

    if not deletion_config.executes:
        print_info("Use --delete to remove directories or --dry-run to simulate.")

    decider.total = sum(1 for c in candidates if passes_thresholds(c, scan_config))

    try:
        with _cancel_on_interrupt(cancel):
            report = run.process(candidates, scanner.warnings)
    except RunAbortError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if report.outcomes:
        console.print(create_outcomes_table(report.outcomes, dry_run=deletion_config.dry_run))
    if deletion_config.executes:
        print_run_summary(report)
    if cancel.is_set():
        print_warning("Interrupted: remaining directories were skipped.")

    _export(settings, root, report, candidates)

    if report.exit_code:
        raise typer.Exit(code=report.exit_code)


@contextmanager
def _cancel_on_interrupt(cancel: threading.Event) -> Iterator[None]:
    """Turn Ctrl+C into a cancellation request honoured between directories."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(_signum: int, _frame: object) -> None:
        cancel.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _export(
    settings: PurgeSettings,
    root: Path,
    report: RunReport,
    candidates: Sequence[Candidate],
) -> None:
    """Write JSON/CSV exports; failures are reported but do not fail the run."""
    if not settings.json_path and not settings.csv_path:
        return

    records = build_records(report, candidates)
    try:
        if settings.json_path:
            saved = export_json(Path(settings.json_path), root, records, report)
            print_info(f"Saved JSON summary to {saved}")
        if settings.csv_path:
            saved = export_csv(Path(settings.csv_path), records)
            print_info(f"Saved CSV summary to {saved}")
    except ExportError as e:
        print_warning(str(e))
