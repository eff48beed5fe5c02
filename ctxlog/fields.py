"""Explicit key/value fields attached to a single log call."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Field:
    """A structured field. Build it with :func:`field` rather than directly."""

    key: str
    value: Any


def field(key: str, value: Any) -> Field:
    """Create a field, replacing an exception value with its message.

    The key ``"event"`` holds the log message, so a field with that key is
    emitted as ``"fields.event"``.
    """
    if isinstance(value, BaseException):
        value = str(value)
    return Field(key=key, value=value)


def merge_fields(base: Mapping[str, Any], fields: Iterable[Field]) -> dict[str, Any]:
    """Apply ``fields`` over a copy of ``base``; the last write for a key wins."""
    merged = dict(base)
    for f in fields:
        merged[f.key] = f.value
    return merged
