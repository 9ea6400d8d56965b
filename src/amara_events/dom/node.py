"""In-memory element tree implementing the engine's event target protocol."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from lxml import etree

from . import selectors
from .events import Event

Listener = Callable[[Event], object]

# Browsers refuse to deliver events to these when they carry ``disabled``.
FORM_CONTROL_TAGS = frozenset(
    {"button", "fieldset", "input", "optgroup", "option", "select", "textarea"}
)


@dataclass(slots=True)
class AttributeIntercept:
    """Records mutations of one attribute while an interception is active."""

    name: str
    present: bool


class Element:
    """Tree node with attributes, listeners and bubbling dispatch.

    A parallel lxml tree mirrors tag names, attributes and structure so CSS
    selectors can be evaluated with ``matches``. Dispatch runs the target
    phase followed by the bubble phase; there is no capture phase.
    """

    def __init__(self, tag: str, attributes: Optional[Mapping[str, str]] = None) -> None:
        self.tag = tag.strip().lower()
        if not self.tag:
            raise ValueError("tag cannot be empty")
        self.parent: Optional[Element] = None
        self.children: List[Element] = []
        self._xml = etree.Element(self.tag)
        self._listeners: Dict[str, List[Listener]] = {}
        self._intercepts: Dict[str, AttributeIntercept] = {}
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    def __repr__(self) -> str:
        attrs = "".join(f" {k}={v!r}" for k, v in self.attributes.items())
        return f"<{self.tag}{attrs}>"

    # -- tree -----------------------------------------------------------

    def append_child(self, child: "Element") -> "Element":
        if child.contains(self):
            raise ValueError("cannot append a node to itself or its descendant")
        if child.parent is not None:
            child.parent.remove_child(child)
        self.children.append(child)
        self._xml.append(child._xml)
        child.parent = self
        return child

    def remove_child(self, child: "Element") -> "Element":
        if child.parent is not self:
            raise ValueError("node is not a child of this element")
        self.children.remove(child)
        self._xml.remove(child._xml)
        child.parent = None
        return child

    def ancestors(self) -> Iterator["Element"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def contains(self, other: "Element") -> bool:
        return other is self or self in other.ancestors()

    def matches(self, selector: str) -> bool:
        return selectors.matches(self._xml, selector)

    # -- attributes -----------------------------------------------------

    @property
    def attributes(self) -> Dict[str, str]:
        return dict(self._xml.attrib)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._xml.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self._xml.attrib

    def set_attribute(self, name: str, value: object = "") -> None:
        key = name.lower()
        intercept = self._intercepts.get(key)
        if intercept is not None:
            intercept.present = True
            return
        self._xml.set(key, str(value))

    def remove_attribute(self, name: str) -> None:
        key = name.lower()
        intercept = self._intercepts.get(key)
        if intercept is not None:
            intercept.present = False
            return
        self._xml.attrib.pop(key, None)

    @contextmanager
    def intercept_attribute(
        self, name: str, present: bool
    ) -> Iterator[AttributeIntercept]:
        """Redirect set/remove of ``name`` into the yielded record.

        The previous interception (if any) is reinstated on exit, whatever
        way the block ends.
        """

        key = name.lower()
        previous = self._intercepts.get(key)
        intercept = AttributeIntercept(name=key, present=present)
        self._intercepts[key] = intercept
        try:
            yield intercept
        finally:
            if previous is None:
                self._intercepts.pop(key, None)
            else:
                self._intercepts[key] = previous

    @property
    def is_disabled_control(self) -> bool:
        return self.tag in FORM_CONTROL_TAGS and self.has_attribute("disabled")

    # -- events ---------------------------------------------------------

    def add_event_listener(self, type: str, listener: Listener) -> None:
        bucket = self._listeners.setdefault(type, [])
        if listener not in bucket:
            bucket.append(listener)

    def remove_event_listener(self, type: str, listener: Listener) -> None:
        bucket = self._listeners.get(type)
        if not bucket or listener not in bucket:
            return
        bucket.remove(listener)
        if not bucket:
            del self._listeners[type]

    def listener_count(self, type: Optional[str] = None) -> int:
        if type is not None:
            return len(self._listeners.get(type, ()))
        return sum(len(bucket) for bucket in self._listeners.values())

    def dispatch_event(self, event: Event) -> bool:
        """Fire ``event`` here and, when it bubbles, on each ancestor.

        Returns ``False`` when a listener canceled the event.
        """

        if event._dispatching:
            raise RuntimeError(f"{event!r} is already being dispatched")
        if self.is_disabled_control:
            return True

        event.target = self
        path = [self]
        if event.bubbles:
            path.extend(self.ancestors())

        event._dispatching = True
        try:
            for node in path:
                event.current_target = node
                node._invoke_listeners(event)
                if event.propagation_stopped:
                    break
        finally:
            event._dispatching = False
            event.current_target = None
        return not event.default_prevented

    def _invoke_listeners(self, event: Event) -> None:
        snapshot = tuple(self._listeners.get(event.type, ()))
        for listener in snapshot:
            if listener not in self._listeners.get(event.type, ()):
                continue
            listener(event)
            if event.immediate_propagation_stopped:
                break


__all__ = ["AttributeIntercept", "Element", "FORM_CONTROL_TAGS", "Listener"]
