"""Re-dispatching actions as events from inside a running handler."""

from __future__ import annotations

import weakref
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, Union

from amara_events.config import EngineSettings
from amara_events.dom.events import CustomEvent, Event, EventInit
from amara_events.errors import SynchronousDispatchRequired
from amara_events.models import LIFECYCLE_PREFIX, Action, HostDispatch
from amara_events.runtime import telemetry

DISABLED = "disabled"


class DispatchContext:
    """Per-engine dispatch state handed to every binding and dispatcher.

    ``allowed`` is true only while a bound handler or a synthetic action
    event is running, which is the only time ``event.dispatch`` may be used.
    """

    def __init__(self) -> None:
        self._allowed = False
        self._patched: "weakref.WeakSet[Any]" = weakref.WeakSet()

    @property
    def allowed(self) -> bool:
        return self._allowed

    @contextmanager
    def synchronous(self) -> Iterator[None]:
        previous = self._allowed
        self._allowed = True
        try:
            yield
        finally:
            self._allowed = previous

    def require(self, action: Optional[Action] = None) -> None:
        if not self._allowed:
            raise SynchronousDispatchRequired(action)

    @contextmanager
    def disabled_workaround(self, target: Any) -> Iterator[None]:
        """Let ``target`` receive events even when it carries ``disabled``.

        The attribute is lifted for the duration of the block and any
        set/remove of it by handlers is recorded instead of applied. The
        recorded state is written back once on exit. Nested dispatches on
        the same target share the outermost scope.
        """

        if target in self._patched:
            yield
            return

        disabled = target.has_attribute(DISABLED)
        if disabled:
            target.remove_attribute(DISABLED)
        self._patched.add(target)
        record = None
        try:
            with target.intercept_attribute(DISABLED, disabled) as record:
                yield
        finally:
            self._patched.discard(target)
            present = record.present if record is not None else disabled
            if present:
                target.set_attribute(DISABLED, "")
            else:
                target.remove_attribute(DISABLED)


class TargetDispatcher:
    """``event.dispatch`` for one target: fires an action as a custom event.

    Holds the target weakly so bindings stored against it never keep it
    alive.
    """

    def __init__(
        self,
        target: Any,
        *,
        context: DispatchContext,
        root: Callable[[], Any],
        host_dispatch: HostDispatch,
        settings: EngineSettings,
    ) -> None:
        self._target_ref = weakref.ref(target)
        self._context = context
        self._root = root
        self._host_dispatch = host_dispatch
        self._settings = settings

    @property
    def target(self) -> Any:
        return self._target_ref()

    def __call__(
        self,
        action: Union[Action, Mapping[str, Any]],
        init: Optional[EventInit] = None,
    ) -> bool:
        """Fire ``action`` on the target; ``False`` if a handler canceled it.

        The object passed in is the event's ``detail`` and is what the host
        receives if the event reaches the root.
        """

        if not self._context.allowed:
            telemetry.record_event(
                "events.async_dispatch_rejected",
                level="warning",
                data={"action": Action.coerce(action).type},
                logger_name=self._settings.logger_name,
            )
        self._context.require(action)
        return self.fire(action, init or self._settings.dispatch_defaults)

    def fire(self, action: Union[Action, Mapping[str, Any]], init: EventInit) -> bool:
        target = self.target
        if target is None:
            return True
        event = CustomEvent(Action.coerce(action).type, init, detail=action)
        with self._context.synchronous(), self._proxy_to_host(event):
            if self._settings.disabled_workaround:
                with self._context.disabled_workaround(target):
                    return target.dispatch_event(event)
            return target.dispatch_event(event)

    @contextmanager
    def _proxy_to_host(self, event: Event) -> Iterator[None]:
        root = self._root()
        if root is None:
            yield
            return

        def forward(reached: Event) -> None:
            if reached is not event or reached.type.startswith(LIFECYCLE_PREFIX):
                return
            telemetry.record_event(
                "events.proxy",
                level="debug",
                data={"action": reached.type},
                logger_name=self._settings.logger_name,
            )
            self._host_dispatch(getattr(reached, "detail", None))

        root.add_event_listener(event.type, forward)
        try:
            yield
        finally:
            root.remove_event_listener(event.type, forward)


__all__ = ["DISABLED", "DispatchContext", "TargetDispatcher"]
