"""Extraction of registered request-context values into log fields."""

from __future__ import annotations

import contextvars
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any


def key_name(key: Any) -> str:
    """Field name used for a registered context key."""
    if isinstance(key, contextvars.ContextVar):
        return key.name
    if isinstance(key, str):
        return key
    return str(key)


def extract_fields(ctx: Mapping[Any, Any] | None, keys: Iterable[Any]) -> dict[str, str]:
    """Collect the values of ``keys`` present in ``ctx``.

    ``ctx`` may be any mapping, including a ``contextvars.Context``. When it is
    ``None`` the current context-variable context is used. Keys that are
    missing or map to ``None`` are left out; non-string values are coerced with
    ``str()``.
    """
    if ctx is None:
        ctx = contextvars.copy_context()

    fields: dict[str, str] = {}
    for key in keys:
        value = _lookup(ctx, key)
        if value is None:
            continue
        fields[key_name(key)] = value if isinstance(value, str) else str(value)
    return fields


def _lookup(ctx: Mapping[Any, Any], key: Any) -> Any:
    # contextvars.Context only accepts ContextVar keys
    if isinstance(ctx, contextvars.Context) and not isinstance(key, contextvars.ContextVar):
        return None
    return ctx.get(key)


def with_value(ctx: Mapping[Any, Any] | None, key: Any, value: Any) -> Mapping[Any, Any]:
    """Return a read-only context carrying ``key -> value`` on top of ``ctx``."""
    derived = dict(ctx) if ctx is not None else {}
    derived[key] = value
    return MappingProxyType(derived)
