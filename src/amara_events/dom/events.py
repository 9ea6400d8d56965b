"""Event objects delivered by the reference DOM."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True, slots=True)
class EventInit:
    """Construction flags; synthetic events neither bubble nor cancel by default."""

    bubbles: bool = False
    cancelable: bool = False
    composed: bool = False


class Event:
    """Base event carrying propagation and cancellation state."""

    def __init__(self, type: str, init: Optional[EventInit] = None) -> None:
        init = init or EventInit()
        self.type = type
        self.bubbles = init.bubbles
        self.cancelable = init.cancelable
        self.composed = init.composed
        self.target: Any = None
        self.current_target: Any = None
        self.default_prevented = False
        # set by the engine on every event handed to a bound handler
        self.dispatch: Optional[Callable[..., bool]] = None
        self._stop_propagation = False
        self._stop_immediate = False
        self._dispatching = False

    def prevent_default(self) -> None:
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        self._stop_propagation = True

    def stop_immediate_propagation(self) -> None:
        self._stop_propagation = True
        self._stop_immediate = True

    @property
    def propagation_stopped(self) -> bool:
        return self._stop_propagation

    @property
    def immediate_propagation_stopped(self) -> bool:
        return self._stop_immediate

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type!r}, bubbles={self.bubbles})"


class CustomEvent(Event):
    """Event with an arbitrary ``detail`` payload."""

    def __init__(
        self, type: str, init: Optional[EventInit] = None, *, detail: Any = None
    ) -> None:
        super().__init__(type, init)
        self.detail = detail


class KeyboardEvent(Event):
    def __init__(
        self, type: str, init: Optional[EventInit] = None, *, key: str = ""
    ) -> None:
        super().__init__(type, init)
        self.key = key


class MouseEvent(Event):
    def __init__(
        self, type: str, init: Optional[EventInit] = None, *, button: int = 0
    ) -> None:
        super().__init__(type, init)
        self.button = button


__all__ = [
    "CustomEvent",
    "Event",
    "EventInit",
    "KeyboardEvent",
    "MouseEvent",
]
