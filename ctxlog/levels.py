"""Log level constants on the stdlib numeric scale used by structlog."""

from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Minimum severity accepted by a logger."""

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL


_ALIASES: dict[str, Level] = {
    "warning": Level.WARN,
    "critical": Level.FATAL,
}


def filter_threshold(level: Level) -> int:
    """Threshold for structlog's filtering logger.

    structlog has no method below debug, so TRACE filters like DEBUG.
    """
    return max(int(level), logging.DEBUG)


def level_from_name(name: str) -> Level:
    """Resolve a level name such as ``"info"`` or ``"WARNING"``.

    Raises:
        ValueError: if the name is not a known level.
    """
    key = name.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Level[key.upper()]
    except KeyError:
        raise ValueError(f"unknown log level: {name!r}") from None
