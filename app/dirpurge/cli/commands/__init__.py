"""CLI commands for dirpurge.

This package contains all subcommand implementations.
"""

from dirpurge.cli.commands import clean, config, scan

__all__ = ["clean", "config", "scan"]
