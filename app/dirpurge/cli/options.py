"""Shared option types and settings resolution for CLI commands."""

from pathlib import Path
from typing import Annotated, Any

import typer

from dirpurge.core.logs import configure_logging
from dirpurge.core.settings import (
    PurgeSettings,
    SettingsError,
    load_settings_or_default,
    save_settings,
)
from dirpurge.utils.formatting import print_error, print_info

RootArg = Annotated[
    Path,
    typer.Argument(help="Base directory to search.", show_default=False),
]
TargetOpt = Annotated[
    list[str] | None,
    typer.Option("--target", "-t", help="Directory name to search for (repeatable)."),
]
ExcludeOpt = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-e", help="Directory name to exclude (repeatable)."),
]
DepthOpt = Annotated[
    int | None,
    typer.Option("--depth", min=0, help="Maximum search depth (0 = unlimited)."),
]
MinSizeOpt = Annotated[
    float | None,
    typer.Option("--min-size", min=0, help="Minimum directory size in MB."),
]
MinAgeOpt = Annotated[
    int | None,
    typer.Option("--min-age", min=0, help="Minimum age in days."),
]
FollowSymlinksOpt = Annotated[
    bool | None,
    typer.Option("--follow-symlinks", help="Follow symbolic links during search."),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Load settings from a TOML file."),
]
SaveConfigOpt = Annotated[
    Path | None,
    typer.Option("--save-config", help="Save the effective settings to a TOML file."),
]
JsonOpt = Annotated[
    Path | None,
    typer.Option("--json", help="Export results to a JSON file."),
]
CsvOpt = Annotated[
    Path | None,
    typer.Option("--csv", help="Export results to a CSV file."),
]


def resolve_settings(
    ctx: typer.Context,
    config_path: Path | None,
    overrides: dict[str, Any],
    save_path: Path | None = None,
) -> PurgeSettings:
    """Load settings, apply command line overrides and optionally save them.

    Global options stored on the context by the main callback take part
    in the merge. If the settings file asks for more verbose output or a
    log file than the command line did, logging is reconfigured.

    Args:
        ctx: Typer context carrying the global options.
        config_path: Explicit settings file, or None for the default location.
        overrides: Command line values keyed by settings field; None = unset.
        save_path: Where to save the effective settings, if requested.

    Returns:
        Effective settings.

    Raises:
        typer.Exit: If settings cannot be loaded, validated or saved.
    """
    options = ctx.obj if isinstance(ctx.obj, dict) else {}
    cli_verbose = bool(options.get("verbose"))
    cli_quiet = bool(options.get("quiet"))
    cli_log = options.get("log_file")

    merged_overrides = {
        **overrides,
        "verbose": True if cli_verbose else None,
        "quiet": True if cli_quiet else None,
        "log": str(cli_log) if cli_log else None,
    }
    try:
        settings = load_settings_or_default(config_path).merged(merged_overrides)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    log_file = Path(settings.log).expanduser() if settings.log else None
    if (settings.verbose, settings.quiet, log_file) != (cli_verbose, cli_quiet, cli_log):
        try:
            configure_logging(verbose=settings.verbose, quiet=settings.quiet, log_file=log_file)
        except OSError as e:
            print_error(f"Failed to create log file: {e}")
            raise typer.Exit(code=1) from e

    if save_path is not None:
        try:
            saved = save_settings(settings, save_path)
        except SettingsError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_info(f"Configuration saved to {saved}")

    return settings
