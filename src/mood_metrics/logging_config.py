"""Logging setup for the mood-metrics CLI.

stdout carries only the JSON report, so every log record goes to stderr
through rich. The library itself never configures logging; it only logs
through ``logging.getLogger(__name__)`` module loggers.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

PACKAGE_LOGGER = "mood_metrics"

_LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """Route log records to stderr (and optionally a file).

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings, e.g. skipped
            files) or "verbose" (resolution details)
        log_file: Optional path; records are appended to it as plain text

    Returns:
        The package logger
    """
    level = _LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            show_time=verbose,
            show_path=verbose,
            rich_tracebacks=True,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    # force: repeated CLI invocations in one process replace earlier handlers
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger
