"""Reference DOM the engine binds to: elements, events, selector matching."""

from .events import CustomEvent, Event, EventInit, KeyboardEvent, MouseEvent
from .node import FORM_CONTROL_TAGS, AttributeIntercept, Element
from .selectors import compile_selector, matches

__all__ = [
    "AttributeIntercept",
    "CustomEvent",
    "Element",
    "Event",
    "EventInit",
    "FORM_CONTROL_TAGS",
    "KeyboardEvent",
    "MouseEvent",
    "compile_selector",
    "matches",
]
