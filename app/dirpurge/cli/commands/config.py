"""Settings management commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from dirpurge.core.paths import get_settings_path
from dirpurge.core.settings import (
    PurgeSettings,
    SettingsError,
    load_settings_or_default,
    save_settings,
)
from dirpurge.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and manage dirpurge settings.",
    no_args_is_help=True,
)

PathOpt = Annotated[
    Path | None,
    typer.Option("--file", "-f", help="Settings file (default: ~/.config/dirpurge/config.toml)."),
]


@app.command()
def show(file: PathOpt = None) -> None:
    """Show the effective settings."""
    try:
        settings = load_settings_or_default(file)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = file or get_settings_path()
    table = Table(
        title="Settings",
        caption=str(source) if source.exists() else "defaults (no settings file)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    for key, value in settings.model_dump(by_alias=True).items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)


@app.command()
def init(
    file: PathOpt = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    target = file or get_settings_path()
    if target.exists() and not force:
        print_info(f"Settings file already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(PurgeSettings(), target)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {saved}")


@app.command()
def path() -> None:
    """Print the default settings file location."""
    typer.echo(str(get_settings_path()))
