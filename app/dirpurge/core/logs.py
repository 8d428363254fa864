"""Logging setup for the command line.

Library modules only create loggers; handlers are installed here once
per process.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from dirpurge.utils.formatting import err_console

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Install console and optional file handlers on the package logger.

    Args:
        verbose: Show debug messages on the console.
        quiet: Only show errors on the console.
        log_file: Also write DEBUG-level logs to this file.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger("dirpurge")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    console_handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG)
