"""Built-in ``amara:add``, ``amara:apply`` and ``amara:remove`` events."""

from __future__ import annotations

from typing import Optional

from amara_events.config import LIFECYCLE_EVENT_INIT
from amara_events.dispatch import TargetDispatcher
from amara_events.models import LIFECYCLE_PREFIX, Action
from amara_events.runtime import telemetry

ADD = f"{LIFECYCLE_PREFIX}add"
APPLY = f"{LIFECYCLE_PREFIX}apply"
REMOVE = f"{LIFECYCLE_PREFIX}remove"


class LifecycleController:
    """Fires lifecycle events on a single target, without bubbling."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def after_apply(self, dispatcher: TargetDispatcher, added: bool) -> None:
        if added:
            self._fire(dispatcher, ADD)
        self._fire(dispatcher, APPLY)

    def before_remove(self, dispatcher: TargetDispatcher) -> None:
        self._fire(dispatcher, REMOVE)

    def _fire(self, dispatcher: TargetDispatcher, event_type: str) -> Optional[bool]:
        telemetry.record_event(
            "events.lifecycle",
            level="debug",
            data={"type": event_type, "target": repr(dispatcher.target)},
            logger_name=self._logger_name,
        )
        return dispatcher.fire(Action(type=event_type), LIFECYCLE_EVENT_INIT)


__all__ = [
    "ADD",
    "APPLY",
    "REMOVE",
    "LifecycleController",
]
