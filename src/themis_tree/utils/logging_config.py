"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module."""
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging for command-line use.

    Args:
        level: Level name (e.g. "DEBUG") or numeric level.

    Raises:
        ValueError: If the level name is unknown.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
