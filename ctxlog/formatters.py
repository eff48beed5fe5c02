"""Output formatter selection and the structlog processor chains behind it."""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from .normalize import json_string


class Formatter(str, Enum):
    """Supported output styles."""

    SIMPLE = "simple"
    TEXT = "text"
    JSON = "json"


def formatter_from_name(name: str) -> Formatter:
    """Resolve a formatter name case-insensitively; unknown names give JSON."""
    try:
        return Formatter(name.strip().lower())
    except ValueError:
        return Formatter.JSON


class SimpleRenderer:
    """Render ``message  | key=value | key=value`` on one line.

    Fields keep their insertion order, so context fields come first. String
    values are written as is, everything else as JSON.
    """

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        message = str(event_dict.pop("event", ""))
        if not event_dict:
            return message
        parts = [f" | {key}={_render_value(value)}" for key, value in event_dict.items()]
        return message + "  " + "".join(parts)


def _render_value(value: Any) -> str:
    return value if isinstance(value, str) else json_string(value)


def processors_for(formatter: Formatter) -> list[Processor]:
    """Processor chain ending in the renderer for ``formatter``."""
    if formatter is Formatter.SIMPLE:
        return [
            structlog.processors.format_exc_info,
            SimpleRenderer(),
        ]

    processors: list[Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),  # ISO 8601 timestamps
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if formatter is Formatter.TEXT:
        processors.append(structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]))
    else:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    return processors
