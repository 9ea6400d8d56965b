"""Actions exchanged with the host and the shapes of event maps."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ContextManager,
    Mapping,
    Optional,
    Protocol,
    Union,
)

if TYPE_CHECKING:
    from amara_events.dom.events import Event

CORE_BOOTSTRAP = "core:bootstrap"
CORE_APPLY_TARGET_RESULTS = "core:apply-target-results"
ENGINE_TARGETS_REMOVED = "engine:targets-removed"

LIFECYCLE_PREFIX = "amara:"

EventHandler = Callable[["Event"], Optional[bool]]
EventMap = Mapping[str, EventHandler]
HostDispatch = Callable[[Union["Action", Mapping[str, Any]]], Any]


class EventTarget(Protocol):
    """What the engine needs from a node it binds to."""

    def add_event_listener(self, type: str, listener: Callable[[Any], Any]) -> None: ...

    def remove_event_listener(
        self, type: str, listener: Callable[[Any], Any]
    ) -> None: ...

    def dispatch_event(self, event: "Event") -> bool: ...

    def has_attribute(self, name: str) -> bool: ...

    def set_attribute(self, name: str, value: object = "") -> None: ...

    def remove_attribute(self, name: str) -> None: ...

    def intercept_attribute(self, name: str, present: bool) -> ContextManager[Any]: ...

    def matches(self, selector: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class Action:
    """Typed payload routed through the host or bubbled as an event."""

    type: str
    payload: Any = None
    meta: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, str):
            raise TypeError("Action type must be a string")
        if self.meta is not None:
            object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    @property
    def is_lifecycle(self) -> bool:
        return self.type.startswith(LIFECYCLE_PREFIX)

    @classmethod
    def coerce(cls, value: Union["Action", Mapping[str, Any]]) -> "Action":
        """Accept an ``Action`` or a ``{"type", "payload", "meta"}`` mapping."""

        if isinstance(value, Action):
            return value
        if isinstance(value, Mapping):
            if "type" not in value:
                raise ValueError("action mapping requires a 'type' key")
            return cls(
                type=value["type"],
                payload=value.get("payload"),
                meta=value.get("meta"),
            )
        raise TypeError(f"Cannot interpret {value!r} as an action")


__all__ = [
    "Action",
    "EventHandler",
    "EventMap",
    "EventTarget",
    "HostDispatch",
    "CORE_BOOTSTRAP",
    "CORE_APPLY_TARGET_RESULTS",
    "ENGINE_TARGETS_REMOVED",
    "LIFECYCLE_PREFIX",
]
