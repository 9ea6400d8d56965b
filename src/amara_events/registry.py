"""Per-target registry of the listeners the engine has attached."""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from amara_events.delegation import delegates_match
from amara_events.dispatch import DispatchContext, TargetDispatcher
from amara_events.meta import meta_matches
from amara_events.models import EventHandler, EventMap
from amara_events.parsing import ParsedSpec


@dataclass(slots=True)
class RegistryStats:
    """Snapshot of what the registry currently holds."""

    target_count: int
    binding_count: int
    event_types: tuple[str, ...]


@dataclass(eq=False)
class HandlerBinding:
    """Native listener wrapping one user handler from one event map.

    Compared by identity so the same handler bound twice stays two
    listeners.
    """

    source: str
    spec: ParsedSpec
    handler: EventHandler
    event_map: EventMap
    dispatcher: TargetDispatcher
    context: DispatchContext

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.source}' must be callable")

    @property
    def event_type(self) -> str:
        return self.spec.event_type

    def accepts(self, event: Any) -> bool:
        return delegates_match(self.spec.delegates, event) and meta_matches(
            self.spec.meta_tokens, event
        )

    def __call__(self, event: Any) -> Optional[bool]:
        if not self.accepts(event):
            return None
        event.dispatch = self.dispatcher
        with self.context.synchronous():
            return self.handler(event)


class TargetRegistry:
    """Maps each bound target to its event type -> bindings table.

    Targets are held weakly; entries disappear when the host reports the
    target removed or when the target itself is collected.
    """

    def __init__(self) -> None:
        self._targets: "weakref.WeakKeyDictionary[Any, Dict[str, List[HandlerBinding]]]" = (
            weakref.WeakKeyDictionary()
        )

    def __contains__(self, target: object) -> bool:
        try:
            return target in self._targets
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._targets.keys()))

    def add(self, target: Any, binding: HandlerBinding) -> bool:
        """Append ``binding`` for ``target``; true when the entry was created."""

        table = self._targets.get(target)
        created = table is None
        if table is None:
            table = self._targets[target] = {}
        table.setdefault(binding.event_type, []).append(binding)
        return created

    def bindings_for(self, target: Any, event_type: str) -> tuple[HandlerBinding, ...]:
        table = self._targets.get(target)
        if not table:
            return ()
        return tuple(table.get(event_type, ()))

    def event_types(self, target: Any) -> tuple[str, ...]:
        return tuple(self._targets.get(target, {}))

    def clear(self, target: Any) -> int:
        """Detach every listener of ``target`` but keep its entry."""

        table = self._targets.get(target)
        if table is None:
            return 0
        detached = _detach(target, table)
        table.clear()
        return detached

    def discard(self, target: Any) -> bool:
        """Detach and forget ``target``; false if it was not registered."""

        table = self._targets.pop(target, None)
        if table is None:
            return False
        _detach(target, table)
        table.clear()
        return True

    def stats(self) -> RegistryStats:
        types: set[str] = set()
        count = 0
        for table in list(self._targets.values()):
            for event_type, bindings in table.items():
                if bindings:
                    types.add(event_type)
                count += len(bindings)
        return RegistryStats(
            target_count=len(self._targets),
            binding_count=count,
            event_types=tuple(sorted(types)),
        )


def _detach(target: Any, table: Dict[str, List[HandlerBinding]]) -> int:
    detached = 0
    for event_type, bindings in table.items():
        for binding in bindings:
            target.remove_event_listener(event_type, binding)
            detached += 1
    return detached


__all__ = ["HandlerBinding", "RegistryStats", "TargetRegistry"]
