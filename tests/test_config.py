from typing import List

import pytest

from amara_events import EngineSettings, EventsEngine, amara_plugin_events
from amara_events.config import ACTION_EVENT_INIT, LIFECYCLE_EVENT_INIT
from amara_events.dom import Element
from amara_events.runtime import telemetry


def test_default_settings() -> None:
    settings = EngineSettings()

    assert settings.disabled_workaround is True
    assert settings.lifecycle_prefix == "amara:"
    assert settings.dispatch_defaults == ACTION_EVENT_INIT
    assert ACTION_EVENT_INIT.bubbles and ACTION_EVENT_INIT.cancelable
    assert ACTION_EVENT_INIT.composed
    assert not LIFECYCLE_EVENT_INIT.bubbles


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AMARA_EVENTS_LOGGER", "host.events")
    monkeypatch.setenv("AMARA_EVENTS_DISABLED_WORKAROUND", "off")

    settings = EngineSettings.from_env()

    assert settings.logger_name == "host.events"
    assert settings.disabled_workaround is False


def test_settings_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AMARA_EVENTS_LOGGER", raising=False)
    monkeypatch.delenv("AMARA_EVENTS_DISABLED_WORKAROUND", raising=False)

    settings = EngineSettings.from_env()

    assert settings.logger_name == telemetry.DEFAULT_LOGGER_NAME
    assert settings.disabled_workaround is True


def test_plugin_factory_passes_settings() -> None:
    settings = EngineSettings(logger_name="custom", disabled_workaround=False)

    engine = amara_plugin_events(settings)(lambda action: None)

    assert isinstance(engine, EventsEngine)
    assert engine.settings is settings


def test_plugin_factory_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AMARA_EVENTS_LOGGER", "host.events")
    monkeypatch.setenv("AMARA_EVENTS_DISABLED_WORKAROUND", "off")

    engine = amara_plugin_events()(lambda action: None)

    assert engine.settings.logger_name == "host.events"
    assert engine.settings.disabled_workaround is False
    assert engine.lifecycle._logger_name == "host.events"


def test_environment_can_turn_off_disabled_workaround(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AMARA_EVENTS_DISABLED_WORKAROUND", "no")
    engine = amara_plugin_events()(lambda action: None)
    button = Element("button", {"disabled": ""})
    seen: List[str] = []
    engine(
        {
            "type": "core:apply-target-results",
            "payload": {"events": {button: [{"amara:apply": lambda e: seen.append(e.type)}]}},
        }
    )

    assert seen == []
    assert button.has_attribute("disabled")
