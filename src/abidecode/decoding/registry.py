"""Event registry helpers.

This module exposes:
- `make_registry(specs)` → EventRegistry prefilled with the given specs
- `add_event_spec(registry, spec)` → insert one spec (lowercases key)
- `add_many(registry, specs)` → insert multiple
- `lookup(registry, topic0)` → spec for a topic word, or None
"""

from __future__ import annotations

from collections.abc import Iterable

from eth_utils import encode_hex

from abidecode.decoding.specs import EventRegistry, EventSpec


def make_registry(specs: Iterable[EventSpec] = ()) -> EventRegistry:
    """Build a registry from event specs."""
    reg: EventRegistry = {}
    add_many(reg, specs)
    return reg


def add_event_spec(registry: EventRegistry, spec: EventSpec) -> None:
    """Insert one spec into the registry keyed by lowercased topic0.

    Anonymous events have no signature topic and cannot be looked up.
    """
    if spec.anonymous:
        raise ValueError(f"Anonymous event {spec.name} cannot be registered by topic0")
    registry[spec.topic0.lower()] = spec


def add_many(registry: EventRegistry, specs: Iterable[EventSpec]) -> None:
    """Insert many specs into the registry."""
    for s in specs:
        add_event_spec(registry, s)


def lookup(registry: EventRegistry, topic0: bytes | str) -> EventSpec | None:
    """Return the spec registered for `topic0` (bytes or hex), if any."""
    key = encode_hex(topic0) if isinstance(topic0, bytes) else topic0
    return registry.get(key.lower())
