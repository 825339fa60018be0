"""Logging setup for Crypto Tracker."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route log records through rich.

    Args:
        verbose: Enable DEBUG output instead of WARNING.
        console: Optional console to log to (stderr by default).
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # aiohttp and the agents SDK are chatty at DEBUG
    for noisy in ("aiohttp", "openai", "httpx", "openai.agents"):
        logging.getLogger(noisy).setLevel(max(level, logging.INFO))
