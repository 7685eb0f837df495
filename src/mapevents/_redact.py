"""Helpers for safe debug logging.

Event payloads hold references to the owning map, native input events
and decoded tiles.  Dumping those into a log line is slow and noisy, so
this module renders payloads with such references replaced by short
type placeholders.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_OPAQUE_KEYS: frozenset[str] = frozenset(
    {
        "owner",
        "originalevent",
        "original_event",
        "tile",
        "resourcedescriptor",
        "resource_descriptor",
        "cause",
    }
)


def _placeholder(value: Any) -> str:
    return f"<{type(value).__name__}>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* suitable for log output."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, BaseModel):
        fields = {name: getattr(value, name) for name in type(value).model_fields}
        return redact_for_log(fields, max_string=max_string, _depth=_depth + 1)

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _OPAQUE_KEYS and v is not None:
                redacted[key] = _placeholder(v)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        # Coordinates are NamedTuples; keep them compact.
        if hasattr(value, "_fields"):
            return str(tuple(value))
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
