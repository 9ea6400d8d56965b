import pytest

from amara_events import DelegationNotAllowed, ParsedSpec, parse_event_spec
from amara_events.parsing import split_spec


def test_plain_event_type() -> None:
    assert parse_event_spec("click") == ParsedSpec(event_type="click")


def test_event_type_is_trimmed_and_lowered() -> None:
    parsed = parse_event_spec("  Click ")

    assert parsed.event_type == "click"
    assert parsed.meta_tokens == ()
    assert parsed.delegates == ()


def test_meta_tokens_are_canonicalized() -> None:
    parsed = parse_event_spec("keydown.Enter.SPACE")

    assert parsed.event_type == "keydown"
    assert parsed.meta_tokens == ("enter", " ")


def test_mouse_button_aliases() -> None:
    parsed = parse_event_spec("mousedown.left.middle.wheel.right")

    assert parsed.meta_tokens == ("0", "1", "1", "2")


def test_delegates_are_split_and_trimmed() -> None:
    parsed = parse_event_spec('keydown.enter.space input[type=text],  .toggle , ')

    assert parsed.event_type == "keydown"
    assert parsed.meta_tokens == ("enter", " ")
    assert parsed.delegates == ("input[type=text]", ".toggle")
    assert parsed.is_delegated


def test_selector_keeps_inner_whitespace() -> None:
    parsed = parse_event_spec('click a[href^="#"], ul > li.active')

    assert parsed.delegates == ('a[href^="#"]', "ul > li.active")


def test_split_spec_handles_bare_and_empty_keys() -> None:
    assert split_spec("click") == ("click", "")
    assert split_spec("click   div , p") == ("click", "div , p")
    assert split_spec("   ") == ("", "")


@pytest.mark.parametrize("event_type", ["amara:add", "amara:apply", "amara:remove"])
def test_lifecycle_events_reject_delegation(event_type: str) -> None:
    with pytest.raises(DelegationNotAllowed, match="must not be delegated") as info:
        parse_event_spec(f"{event_type} div")

    assert info.value.event_type == event_type
    assert info.value.spec == f"{event_type} div"


def test_lifecycle_event_without_selector_is_accepted() -> None:
    parsed = parse_event_spec("amara:add")

    assert parsed.is_lifecycle
    assert not parsed.is_delegated


def test_empty_selector_list_is_not_delegation() -> None:
    parsed = parse_event_spec("amara:apply  , ,")

    assert parsed.delegates == ()
