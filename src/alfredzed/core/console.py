"""Console output and logging configuration.

Stdout carries the JSON document for the launcher, so everything
human-facing goes to stderr:
    - stderr_console: Rich console for stderr
    - setup_logging(): Configure logging with Rich handler
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def _normalize_level(level: str | int) -> int:
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        # logging also exposes non-level constants such as BASIC_FORMAT
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return logging.WARNING
    return int(level)


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Configure logging with a Rich handler on stderr and return the app logger."""
    numeric_level = _normalize_level(level)

    handler = RichHandler(
        console=stderr_console,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(numeric_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)
    root.addHandler(handler)

    logger = logging.getLogger("alfredzed")
    logger.setLevel(numeric_level)

    return logger
