"""Keyboard and mouse meta qualifiers (``keydown.enter``, ``mousedown.right``)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

# Shared by keyboard and mouse specs; the two value domains do not overlap.
META_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "space": " ",
        "left": "0",
        "middle": "1",
        "wheel": "1",
        "right": "2",
    }
)

# Live values some browsers report under a legacy name.
META_FIXUPS: Mapping[str, str] = MappingProxyType({"del": "delete"})

META_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "keydown": "key",
        "keyup": "key",
        "keypress": "key",
        "mousedown": "button",
        "mouseup": "button",
    }
)


def as_meta(token: str) -> str:
    return META_ALIASES.get(token, token)


def fix_meta(value: str) -> str:
    return META_FIXUPS.get(value, value)


def meta_value(event: Any) -> Optional[str]:
    """Lower-cased comparison value of ``event`` or ``None`` if it has none."""

    field_name = META_FIELDS.get(event.type)
    if field_name is None:
        return None
    raw = getattr(event, field_name, None)
    if raw is None:
        return None
    return fix_meta(str(raw).lower())


def meta_matches(tokens: Iterable[str], event: Any) -> bool:
    tokens = tuple(tokens)
    if not tokens:
        return True
    value = meta_value(event)
    return value is not None and value in tokens


__all__ = [
    "META_ALIASES",
    "META_FIELDS",
    "META_FIXUPS",
    "as_meta",
    "fix_meta",
    "meta_matches",
    "meta_value",
]
