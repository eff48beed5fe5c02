"""Process-wide default logger and module-level logging functions.

Call :func:`init` once at startup, before other threads start logging;
re-initializing while logging is in progress is not synchronized.
"""

from __future__ import annotations

import os
import sys
from typing import Any

from .config import LoggerConfig, get_settings
from .fields import Field
from .formatters import Formatter
from .levels import Level
from .logger import Context, ContextLogger

_default = ContextLogger()


def init(formatter: Formatter | str, level: Level | int | str, *context_keys: Any) -> ContextLogger:
    """Replace the default logger's formatter, level and registered context keys."""
    global _default
    _default = ContextLogger(LoggerConfig(formatter=formatter, level=level, context_keys=context_keys))
    return _default


def configure_from_env() -> ContextLogger:
    """Initialize the default logger from ``LOG_FORMATTER``, ``LOG_LEVEL`` and ``LOG_CONTEXT_KEYS``."""
    settings = get_settings()
    return init(settings.log_formatter, settings.log_level, *settings.context_keys)


def get_logger() -> ContextLogger:
    return _default


def debug(ctx: Context, message: Any, *fields: Field) -> None:
    _default.debug(ctx, message, *fields)


def debugf(ctx: Context, fmt: str, *args: Any) -> None:
    _default.debugf(ctx, fmt, *args)


def info(ctx: Context, message: Any, *fields: Field) -> None:
    _default.info(ctx, message, *fields)


def infof(ctx: Context, fmt: str, *args: Any) -> None:
    _default.infof(ctx, fmt, *args)


def warn(ctx: Context, message: Any, *fields: Field) -> None:
    _default.warn(ctx, message, *fields)


def warnf(ctx: Context, fmt: str, *args: Any) -> None:
    _default.warnf(ctx, fmt, *args)


def error(ctx: Context, message: Any, *fields: Field) -> None:
    _default.error(ctx, message, *fields)


def errorf(ctx: Context, fmt: str, *args: Any) -> None:
    _default.errorf(ctx, fmt, *args)


def fatal(ctx: Context, err: Any) -> None:
    _default.fatal(ctx, err)


def fatalf(ctx: Context, fmt: str, *args: Any) -> None:
    _default.fatalf(ctx, fmt, *args)


def sync() -> None:
    """Flush stderr and stdout down to their file descriptors, ignoring errors."""
    for stream in (sys.stderr, sys.stdout):
        try:
            stream.flush()
            os.fsync(stream.fileno())
        except (OSError, ValueError):
            pass
