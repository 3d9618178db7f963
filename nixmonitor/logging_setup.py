"""Logging configuration for nixmonitor.

Diagnostics about nixmonitor itself go through the standard ``logging``
module under the ``nixmonitor`` logger.  They are written either to a file
or, through ``rich.logging.RichHandler``, to the same stderr console as the
live display so records are printed above the live region instead of
tearing it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("nixmonitor")

_initialized = False

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(name: str) -> int:
    """Map a level name to a ``logging`` constant, defaulting to WARNING."""
    return _LEVEL_MAP.get(name.upper(), logging.WARNING)


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Initialize the ``nixmonitor`` logger.

    Call once at startup.  Subsequent calls are no-ops.

    Parameters
    ----------
    level:
        Level name (``DEBUG`` .. ``CRITICAL``).
    log_file:
        Append records to this file instead of the console.
    console:
        Console for the Rich handler.  Share the renderer's console so log
        records and the live display cooperate.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    log_level = resolve_level(level)
    logger.setLevel(log_level)
    logger.propagate = False

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
            )
        )
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
    handler.setLevel(log_level)
    logger.addHandler(handler)
