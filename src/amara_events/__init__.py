"""Declarative DOM event maps with delegation, meta filters and action bubbling."""

from .config import EngineSettings
from .dispatch import DispatchContext, TargetDispatcher
from .engine import EventsEngine, amara_plugin_events
from .errors import DelegationNotAllowed, EventsError, SynchronousDispatchRequired
from .lifecycle import ADD, APPLY, REMOVE
from .models import (
    CORE_APPLY_TARGET_RESULTS,
    CORE_BOOTSTRAP,
    ENGINE_TARGETS_REMOVED,
    Action,
    EventMap,
)
from .parsing import ParsedSpec, parse_event_spec
from .registry import HandlerBinding, RegistryStats, TargetRegistry

__all__ = [
    "ADD",
    "APPLY",
    "REMOVE",
    "Action",
    "CORE_APPLY_TARGET_RESULTS",
    "CORE_BOOTSTRAP",
    "DelegationNotAllowed",
    "DispatchContext",
    "ENGINE_TARGETS_REMOVED",
    "EngineSettings",
    "EventMap",
    "EventsEngine",
    "EventsError",
    "HandlerBinding",
    "ParsedSpec",
    "RegistryStats",
    "SynchronousDispatchRequired",
    "TargetDispatcher",
    "TargetRegistry",
    "amara_plugin_events",
    "parse_event_spec",
]

__version__ = "0.1.0"
