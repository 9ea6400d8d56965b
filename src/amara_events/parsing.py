"""Parsing of event map keys such as ``"keydown.enter input, .toggle"``."""

from __future__ import annotations

from dataclasses import dataclass

from amara_events.errors import DelegationNotAllowed
from amara_events.models import LIFECYCLE_PREFIX

from .meta import as_meta


@dataclass(frozen=True, slots=True)
class ParsedSpec:
    """Event type, canonical meta tokens and delegation selectors of a key."""

    event_type: str
    meta_tokens: tuple[str, ...] = ()
    delegates: tuple[str, ...] = ()

    @property
    def is_lifecycle(self) -> bool:
        return self.event_type.startswith(LIFECYCLE_PREFIX)

    @property
    def is_delegated(self) -> bool:
        return bool(self.delegates)


def split_spec(spec: str) -> tuple[str, str]:
    """Split ``spec`` into its event token and the raw selector list."""

    parts = spec.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def parse_event_spec(spec: str) -> ParsedSpec:
    event_token, selector_list = split_spec(spec)
    event_type, *raw_meta = (part.strip().lower() for part in event_token.split("."))
    delegates = tuple(
        selector
        for selector in (piece.strip() for piece in selector_list.split(","))
        if selector
    )
    parsed = ParsedSpec(
        event_type=event_type,
        meta_tokens=tuple(as_meta(token) for token in raw_meta),
        delegates=delegates,
    )
    if parsed.is_lifecycle and parsed.is_delegated:
        raise DelegationNotAllowed(spec, parsed.event_type)
    return parsed


__all__ = ["ParsedSpec", "parse_event_spec", "split_spec"]
