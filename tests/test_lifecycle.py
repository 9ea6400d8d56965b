from typing import Any, Dict, List

import pytest

from amara_events import ADD, APPLY, REMOVE, Action, DelegationNotAllowed, EventsEngine
from amara_events.dom import CustomEvent, Element, Event, EventInit


def make_engine() -> EventsEngine:
    return EventsEngine(lambda action: None)


def apply(target: Element, *maps: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "core:apply-target-results",
        "payload": {"events": {target: list(maps)}},
    }


def removed(*targets: Element) -> Dict[str, Any]:
    return {"type": "engine:targets-removed", "payload": list(targets)}


def counter(log: List[str], name: str) -> Any:
    return lambda event: log.append(name)


@pytest.mark.parametrize("event_type", [ADD, APPLY, REMOVE])
def test_throws_if_selector_provided(event_type: str) -> None:
    engine = make_engine()
    div = Element("div")

    with pytest.raises(DelegationNotAllowed, match="amara:\\* events must not be delegated"):
        engine(apply(div, {f"{event_type} div": lambda e: None}))

    assert div.listener_count() == 0


def test_delegation_error_keeps_earlier_bindings_of_the_call() -> None:
    engine = make_engine()
    div = Element("div")

    with pytest.raises(DelegationNotAllowed):
        engine(apply(div, {"click": lambda e: None, "amara:add .x": lambda e: None}))

    assert div.listener_count("click") == 1


def test_add_runs_when_target_first_applied() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:add": counter(log, "add")}))

    assert log == ["add"]


def test_add_runs_multiple_handlers() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:add": counter(log, "one")}, {"amara:add": counter(log, "two")}))

    assert log == ["one", "two"]


def test_add_does_not_run_when_target_reapplied() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:add": counter(log, "add")}))
    engine(apply(div, {"amara:add": counter(log, "add")}))
    engine(apply(div, {"amara:add": counter(log, "late")}))

    assert log == ["add"]


def test_add_runs_before_apply() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:apply": counter(log, "apply"), "amara:add": counter(log, "add")}))

    assert log == ["add", "apply"]


def test_apply_runs_for_every_apply_call() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:apply": counter(log, "apply")}))
    engine(apply(div, {"amara:apply": counter(log, "apply")}))

    assert log == ["apply", "apply"]


def test_apply_runs_multiple_handlers() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:apply": counter(log, "one")}, {"amara:apply": counter(log, "two")}))

    assert log == ["one", "two"]


def test_apply_fires_after_all_bindings_attached() -> None:
    engine = make_engine()
    div = Element("div")
    counts: List[int] = []

    engine(
        apply(
            div,
            {"amara:apply": lambda e: counts.append(div.listener_count())},
            {"click": lambda e: None, "keyup": lambda e: None},
        )
    )

    assert counts == [3]


@pytest.mark.parametrize("event_type", [ADD, APPLY, REMOVE])
def test_lifecycle_events_do_not_bubble(event_type: str) -> None:
    engine = make_engine()
    parent = Element("div")
    child = parent.append_child(Element("div"))
    log: List[str] = []
    engine(apply(parent, {event_type: counter(log, "parent")}))
    log.clear()

    engine(apply(child, {"click": lambda e: None}))
    engine(removed(child))

    assert log == []


def test_lifecycle_event_carries_action_detail() -> None:
    engine = make_engine()
    div = Element("div")
    seen: List[Event] = []

    engine(apply(div, {"amara:add": seen.append}))

    (event,) = seen
    assert isinstance(event, CustomEvent)
    assert event.detail == Action(ADD)
    assert event.bubbles is False
    assert event.cancelable is False


def test_add_and_apply_do_not_run_when_target_removed() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []
    engine(apply(div, {"amara:add": counter(log, "add"), "amara:apply": counter(log, "apply")}))
    log.clear()

    engine(removed(div))

    assert log == []


def test_remove_does_not_run_when_target_applied() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []

    engine(apply(div, {"amara:remove": counter(log, "remove")}))
    engine(apply(div, {"amara:remove": counter(log, "remove")}))

    assert log == []


def test_remove_runs_once_when_target_removed() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []
    engine(apply(div, {"amara:remove": counter(log, "remove")}))

    engine(removed(div))
    engine(removed(div))

    assert log == ["remove"]


def test_remove_runs_multiple_handlers() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []
    engine(apply(div, {"amara:remove": counter(log, "one")}, {"amara:remove": counter(log, "two")}))

    engine(removed(div))

    assert log == ["one", "two"]


def test_remove_sees_handlers_still_attached() -> None:
    engine = make_engine()
    div = Element("div")
    counts: List[int] = []
    engine(apply(div, {"amara:remove": lambda e: counts.append(div.listener_count()), "click": lambda e: None}))

    engine(removed(div))

    assert counts == [2]
    assert div.listener_count() == 0


def test_lifecycle_handlers_may_dispatch_actions() -> None:
    engine = make_engine()
    div = Element("div")
    details: List[Any] = []

    engine(
        apply(
            div,
            {"amara:add": lambda e: e.dispatch(Action("ready"))},
            {"ready": lambda e: details.append(e.detail)},
        )
    )

    assert details == [Action("ready")]


def test_lifecycle_events_can_be_fired_manually() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []
    engine(apply(div, {"amara:apply": counter(log, "apply")}))

    div.dispatch_event(CustomEvent(APPLY, EventInit()))

    assert log == ["apply", "apply"]


def test_add_fires_again_after_removal_and_reapply() -> None:
    engine = make_engine()
    div = Element("div")
    log: List[str] = []
    engine(apply(div, {"amara:add": counter(log, "add")}))
    engine(removed(div))

    engine(apply(div, {"amara:add": counter(log, "add")}))

    assert log == ["add", "add"]
