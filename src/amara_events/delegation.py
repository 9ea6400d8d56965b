"""Selector-based delegation against an event's original target."""

from __future__ import annotations

from typing import Any, Sequence


def delegates_match(delegates: Sequence[str], event: Any) -> bool:
    """Return whether ``event`` should reach a handler declaring ``delegates``.

    Only ``event.target`` is tested, never ancestors between it and the node
    the handler is bound on.
    """

    if not delegates:
        return True
    origin = event.target
    if origin is None or not hasattr(origin, "matches"):
        return False
    return any(origin.matches(selector) for selector in delegates)


__all__ = ["delegates_match"]
