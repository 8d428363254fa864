"""Scan command: find matching directories without touching them."""

from pathlib import Path
from typing import Annotated

import typer

from dirpurge.cli.display import create_candidates_table, print_candidates_summary
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
from dirpurge.core.errors import RunAbortError
from dirpurge.core.export import ExportError, build_records, export_csv, export_json
from dirpurge.core.pipeline import PurgeRun
from dirpurge.core.selection import passes_thresholds
from dirpurge.utils.formatting import console, print_error, print_info, print_warning


def scan(
    ctx: typer.Context,
    root: RootArg,
    target: TargetOpt = None,
    exclude: ExcludeOpt = None,
    depth: DepthOpt = None,
    min_size: MinSizeOpt = None,
    min_age: MinAgeOpt = None,
    follow_symlinks: FollowSymlinksOpt = None,
    config: ConfigOpt = None,
    save_config: SaveConfigOpt = None,
    json_path: JsonOpt = None,
    csv_path: CsvOpt = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=1, help="Limit number of displayed results."),
    ] = None,
) -> None:
    """Scan for matching directories without changing anything."""
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
            "json_path": str(json_path) if json_path else None,
            "csv_path": str(csv_path) if csv_path else None,
        },
        save_config,
    )
    scan_config = settings.to_scan_config()
    run = PurgeRun(scan_config, settings.to_deletion_config())

    try:
        found, scanner = run.scan(root)
    except RunAbortError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for warning in scanner.warnings:
        print_warning(f"Cannot read {warning.path}: {warning.message}")

    candidates = [c for c in found if passes_thresholds(c, scan_config)]
    filtered = len(found) - len(candidates)

    if not candidates:
        print_info("No matching directories found.")
        if filtered:
            print_info(f"{filtered} director(ies) below the size/age threshold.")
        return

    candidates.sort(key=lambda c: c.size_bytes, reverse=True)
    display = candidates[:limit] if limit else candidates

    console.print(create_candidates_table(display))
    print_candidates_summary(candidates)
    if limit and len(display) < len(candidates):
        console.print(
            f"[dim](showing {len(display)} of {len(candidates)}, limited to {limit})[/dim]"
        )
    if filtered:
        print_info(f"{filtered} director(ies) below the size/age threshold.")

    records = build_records(candidates=candidates)
    try:
        if settings.json_path:
            saved = export_json(Path(settings.json_path), root, records)
            print_info(f"Saved JSON summary to {saved}")
        if settings.csv_path:
            saved = export_csv(Path(settings.csv_path), records)
            print_info(f"Saved CSV summary to {saved}")
    except ExportError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
