"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirpurge import __version__
from dirpurge.cli.commands import clean, config, scan
from dirpurge.core.logs import configure_logging
from dirpurge.utils.formatting import print_error

# Create main Typer app
app = typer.Typer(
    name="dirpurge",
    help="Find and safely remove regenerable build and dependency directories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="Tip: always run with --dry-run first.",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dirpurge version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log",
            help="Write a debug log to this file.",
        ),
    ] = None,
) -> None:
    """dirpurge - find and safely remove regenerable directories.

    Scans a directory tree for dependency caches and build outputs
    (node_modules, venv, target, ...) and moves them to the trash,
    optionally backing them up or archiving them first.
    """
    try:
        configure_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    except OSError as e:
        print_error(f"Failed to create log file: {e}")
        raise typer.Exit(code=1) from e

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["log_file"] = log_file


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="clean")(clean.clean)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
