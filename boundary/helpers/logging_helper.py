"""
Logging helpers.

The package logs through the standard library only; every module owns a
`logging.getLogger(__name__)` logger. This module configures the root
handler once for command-line style entry points.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging once.

    Subsequent calls only adjust the level of the package logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level
    """
    global _configured

    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    if not _configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _configured = True

    logging.getLogger("boundary").setLevel(level)
