"""Human-readable payload rendering used by the containers' ``__str__``."""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = ['describe']

_json = msgspec.json.Encoder()


def _has_default_repr(value: Any) -> bool:
    return type(value).__repr__ is object.__repr__


def describe(value: Any) -> str:
    """Render a payload for display inside ``Some(...)``, ``Ok(...)`` or ``Err(...)``.

    Strings are quoted, dicts and objects without a useful ``repr`` are
    rendered as compact JSON when msgspec can encode them, and everything
    else falls back to ``repr``.
    """
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, dict) or _has_default_repr(value):
        try:
            return _json.encode(value).decode()
        except (TypeError, ValueError, msgspec.EncodeError):
            pass
    return repr(value)
