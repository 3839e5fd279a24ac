"""Logging configuration for the taskdeck CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "taskdeck"


def setup_logging(*, level: int = logging.WARNING, console: Console | None = None) -> None:
    """Route ``taskdeck.*`` log records to stderr through rich.

    Safe to call more than once; the previous rich handler is replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
