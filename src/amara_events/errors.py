"""Errors raised by the events engine."""

from __future__ import annotations

from typing import Any


class EventsError(RuntimeError):
    """Base class for engine-level failures."""


class DelegationNotAllowed(EventsError, ValueError):
    """Raised when an ``amara:*`` event spec declares delegation selectors."""

    def __init__(self, spec: str, event_type: str) -> None:
        super().__init__("amara:* events must not be delegated")
        self.spec = spec
        self.event_type = event_type


class SynchronousDispatchRequired(EventsError):
    """Raised when ``event.dispatch`` runs outside the triggering handler."""

    def __init__(self, action: Any = None) -> None:
        super().__init__("Event actions must be dispatched synchronously.")
        self.action = action


__all__ = [
    "EventsError",
    "DelegationNotAllowed",
    "SynchronousDispatchRequired",
]
