from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "polymorph"


def setup_logging(level: int = logging.INFO, console: Console | None = None) -> logging.Logger:
    """Route the ``polymorph`` logger through a rich handler.

    Safe to call repeatedly; existing handlers are replaced rather than stacked.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True, log_time_format="%H:%M:%S")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
