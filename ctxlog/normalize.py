"""Argument normalization for formatted log calls.

Primitives and objects that know how to render themselves are handed to the
formatter untouched; anything else is encoded as a JSON string so that maps,
dataclasses and plain objects always render predictably.
"""

from __future__ import annotations

import dataclasses
import json
import math
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_model(value: Any) -> bool:
    """True for pydantic-style models, which encode through ``model_dump``."""
    return callable(getattr(value, "model_dump", None))


def has_text_representation(value: Any) -> bool:
    """True when the value's type defines its own ``__str__``.

    Models define a generic ``__str__`` but are records, not text.
    """
    if is_model(value):
        return False
    return type(value).__str__ is not object.__str__


def has_error_representation(value: Any) -> bool:
    return isinstance(value, BaseException)


# Evaluated in order; the first match passes the value through unchanged.
PASS_THROUGH: tuple[Callable[[Any], bool], ...] = (
    is_string,
    is_numeric,
    is_boolean,
    has_text_representation,
    has_error_representation,
)


def normalize_arg(value: Any) -> Any:
    """Return ``value`` itself if it is loggable as is, else its JSON string."""
    for predicate in PASS_THROUGH:
        if predicate(value):
            return value
    return json_string(value)


def normalize_args(values: Iterable[Any]) -> list[Any]:
    """Normalize every value, preserving order and length."""
    return [normalize_arg(value) for value in values]


def json_string(value: Any) -> str:
    """Encode ``value`` as deterministic JSON, or ``""`` if it cannot be encoded."""
    try:
        return json.dumps(_to_json(value, set()), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError):
        return ""


def _to_json(value: Any, active: set[int]) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"unsupported float value: {value!r}")
        return value

    marker = id(value)
    if marker in active:
        raise ValueError("cyclic structure")
    active.add(marker)
    try:
        return _container_to_json(value, active)
    finally:
        active.discard(marker)


def _container_to_json(value: Any, active: set[int]) -> Any:
    if isinstance(value, Mapping):
        items = [(_key_to_json(k), v) for k, v in value.items()]
        items.sort(key=lambda item: item[0])
        return {k: _to_json(v, active) for k, v in items}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_json(getattr(value, f.name), active) for f in dataclasses.fields(value)}
    if is_model(value):
        return _to_json(value.model_dump(mode="json"), active)
    if isinstance(value, (list, tuple)):
        return [_to_json(v, active) for v in value]
    if isinstance(value, (set, frozenset)):
        members = [_to_json(v, active) for v in value]
        members.sort(key=lambda m: json.dumps(m, sort_keys=True))
        return members
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return _to_json(value.value, active)
    if has_error_representation(value) or has_text_representation(value):
        return str(value)
    if isinstance(value, type) or callable(value):
        raise TypeError(f"unsupported type: {type(value).__name__}")
    if hasattr(value, "__dict__"):
        return {k: _to_json(v, active) for k, v in vars(value).items() if not k.startswith("_")}
    raise TypeError(f"unsupported type: {type(value).__name__}")


def _key_to_json(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return json.dumps(key, allow_nan=False)
    raise TypeError(f"unsupported key type: {type(key).__name__}")
