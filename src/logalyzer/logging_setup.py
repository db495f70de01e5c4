"""Logging configuration for the command line entry point."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("logalyzer")


def setup_logging(*, verbose: bool = False, console: Console | None = None) -> None:
    """Attach a Rich handler writing to stderr to the ``logalyzer`` logger.

    Calling it again replaces the handler instead of adding another one.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
