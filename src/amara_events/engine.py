"""Host-facing handler that binds event maps to targets."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from amara_events.config import EngineSettings
from amara_events.dispatch import DispatchContext, TargetDispatcher
from amara_events.errors import DelegationNotAllowed
from amara_events.lifecycle import LifecycleController
from amara_events.models import (
    CORE_APPLY_TARGET_RESULTS,
    CORE_BOOTSTRAP,
    ENGINE_TARGETS_REMOVED,
    Action,
    EventMap,
    EventTarget,
    HostDispatch,
)
from amara_events.parsing import ParsedSpec, parse_event_spec
from amara_events.registry import HandlerBinding, TargetRegistry
from amara_events.runtime import telemetry


def _field(payload: Any, name: str) -> Any:
    if payload is None:
        return None
    if isinstance(payload, Mapping):
        return payload.get(name)
    return getattr(payload, name, None)


def _target_pairs(events: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(events, Mapping):
        yield from events.items()
    else:
        for target, maps in events:
            yield target, maps


def flatten_maps(maps: Union[EventMap, Iterable[Any]]) -> Iterator[EventMap]:
    """Yield event maps from a map, a list of maps, or a list nesting lists once."""

    if isinstance(maps, Mapping):
        yield maps
        return
    for item in maps:
        if isinstance(item, Mapping):
            yield item
        else:
            yield from item


class EventsEngine:
    """Reacts to host actions: bootstrap, apply-target-results, targets-removed.

    The engine owns all registry mutation. Every apply for a target detaches
    the target's previous listeners before attaching the new ones, then fires
    ``amara:add`` (first apply only) and ``amara:apply``.
    """

    def __init__(
        self,
        host_dispatch: HostDispatch,
        *,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.root: Any = None
        self.registry = TargetRegistry()
        self.context = DispatchContext()
        self.lifecycle = LifecycleController(logger_name=self.settings.logger_name)
        self._host_dispatch = host_dispatch

    def __call__(self, action: Union[Action, Mapping[str, Any]]) -> None:
        self.handle(action)

    def handle(self, action: Union[Action, Mapping[str, Any]]) -> None:
        action = Action.coerce(action)
        if action.type == CORE_BOOTSTRAP:
            self.bootstrap(_field(action.payload, "target"))
        elif action.type == CORE_APPLY_TARGET_RESULTS:
            events = _field(action.payload, "events")
            if events:
                for target, maps in _target_pairs(events):
                    self.apply_events_to_target(target, maps)
        elif action.type == ENGINE_TARGETS_REMOVED:
            for target in action.payload or ():
                self.remove_target_handlers(target)

    def bootstrap(self, root: Any) -> None:
        self.root = root
        telemetry.record_event(
            "events.bootstrap",
            data={"root": repr(root)},
            logger_name=self.settings.logger_name,
        )

    def dispatcher_for(self, target: EventTarget) -> TargetDispatcher:
        return TargetDispatcher(
            target,
            context=self.context,
            root=lambda: self.root,
            host_dispatch=self._host_dispatch,
            settings=self.settings,
        )

    def apply_events_to_target(self, target: EventTarget, maps: Any) -> None:
        dispatcher = self.dispatcher_for(target)
        event_maps = list(flatten_maps(maps))
        with telemetry.span(
            "events::apply_target",
            logger_name=self.settings.logger_name,
            component="events",
            target=repr(target),
            event_maps=len(event_maps),
        ) as handle:
            self.registry.clear(target)
            added = False
            count = 0
            for event_map in event_maps:
                for source, handler in event_map.items():
                    binding = HandlerBinding(
                        source=source,
                        spec=self._parse(source),
                        handler=handler,
                        event_map=event_map,
                        dispatcher=dispatcher,
                        context=self.context,
                    )
                    target.add_event_listener(binding.event_type, binding)
                    added = self.registry.add(target, binding) or added
                    count += 1
            handle.note("bindings", count)
            handle.note("added", added)
            self.lifecycle.after_apply(dispatcher, added)

    def remove_target_handlers(self, target: EventTarget) -> bool:
        if target not in self.registry:
            return False
        with telemetry.span(
            "events::remove_target",
            logger_name=self.settings.logger_name,
            component="events",
            target=repr(target),
        ):
            self.lifecycle.before_remove(self.dispatcher_for(target))
            self.registry.discard(target)
        return True

    def _parse(self, source: str) -> ParsedSpec:
        try:
            return parse_event_spec(source)
        except DelegationNotAllowed as exc:
            telemetry.record_event(
                "events.delegation_rejected",
                level="warning",
                data={"spec": source, "event_type": exc.event_type},
                logger_name=self.settings.logger_name,
            )
            raise


def amara_plugin_events(
    settings: Optional[EngineSettings] = None,
) -> Callable[[HostDispatch], EventsEngine]:
    """Plugin entry point: ``amara_plugin_events()(dispatch)`` yields the handler."""

    def create_handler(host_dispatch: HostDispatch) -> EventsEngine:
        return EventsEngine(host_dispatch, settings=settings)

    return create_handler


__all__ = ["EventsEngine", "amara_plugin_events", "flatten_maps"]
