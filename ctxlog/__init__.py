"""Context-aware logging facade over structlog."""

from __future__ import annotations

from .config import LoggerConfig, Settings, get_settings
from .context import extract_fields, key_name, with_value
from .facade import (
    configure_from_env,
    debug,
    debugf,
    error,
    errorf,
    fatal,
    fatalf,
    get_logger,
    info,
    infof,
    init,
    sync,
    warn,
    warnf,
)
from .fields import Field, field, merge_fields
from .formatters import Formatter, SimpleRenderer, formatter_from_name, processors_for
from .levels import Level, level_from_name
from .logger import ContextLogger
from .normalize import json_string, normalize_args

__all__ = [
    "__version__",
    "ContextLogger",
    "LoggerConfig",
    "Settings",
    "get_settings",
    "Formatter",
    "SimpleRenderer",
    "formatter_from_name",
    "processors_for",
    "Level",
    "level_from_name",
    "Field",
    "field",
    "merge_fields",
    "extract_fields",
    "key_name",
    "with_value",
    "normalize_args",
    "json_string",
    "init",
    "configure_from_env",
    "get_logger",
    "debug",
    "debugf",
    "info",
    "infof",
    "warn",
    "warnf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "sync",
]

__version__ = "0.1.0"
