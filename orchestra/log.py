"""Logging configuration for Orchestra."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "orchestra"


def setup_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Attach a Rich handler to the package logger.

    Safe to call more than once; the previous Rich handler is replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
