"""Engine settings and their environment overrides."""

from __future__ import annotations

from dataclasses import dataclass, field

from amara_events.dom.events import EventInit
from amara_events.models import LIFECYCLE_PREFIX
from amara_events.runtime.telemetry import DEFAULT_LOGGER_NAME, env_flag, env_value

# Actions re-dispatched from handlers bubble, can be canceled and cross shadow roots.
ACTION_EVENT_INIT = EventInit(bubbles=True, cancelable=True, composed=True)

# Lifecycle events stay on their target.
LIFECYCLE_EVENT_INIT = EventInit()


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs for one engine instance."""

    logger_name: str = DEFAULT_LOGGER_NAME
    disabled_workaround: bool = True
    dispatch_defaults: EventInit = field(default=ACTION_EVENT_INIT)

    @property
    def lifecycle_prefix(self) -> str:
        return LIFECYCLE_PREFIX

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Read ``AMARA_EVENTS_LOGGER`` and ``AMARA_EVENTS_DISABLED_WORKAROUND``."""

        return cls(
            logger_name=env_value("LOGGER") or DEFAULT_LOGGER_NAME,
            disabled_workaround=env_flag("DISABLED_WORKAROUND", True),
        )


__all__ = ["ACTION_EVENT_INIT", "EngineSettings", "LIFECYCLE_EVENT_INIT"]
