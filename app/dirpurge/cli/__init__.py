"""CLI package for dirpurge.

This package contains the Typer application and all subcommands.
"""

from dirpurge.cli.main import app

__all__ = ["app"]
