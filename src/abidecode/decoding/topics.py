"""Encode values as 32-byte log topics for `eth_getLogs` filters.

- ints (and bools) → 256-bit two's complement word
- addresses → left-padded 20 bytes
- bytesN → right-padded (ABI layout); untyped bytes → left-padded
- strings and dynamic bytes → keccak256 of the raw value, which is how
  indexed dynamic values are stored in topics
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eth_utils import encode_hex, is_address, keccak, to_canonical_address

from abidecode.constants import WORD_SIZE
from abidecode.decoding.specs import EventSpec
from abidecode.decoding.types import (
    AddressType,
    DynamicBytesType,
    FixedBytesType,
    StringType,
    TypeDescriptor,
)

TopicFilter = list[str | list[str] | None]


def _int_word(value: int) -> bytes:
    if not -(2**255) <= value < 2**256:
        raise ValueError(f"Integer {value} does not fit in 256 bits")
    return (value % 2**256).to_bytes(WORD_SIZE, "big")


def _left_pad(value: bytes) -> bytes:
    if len(value) > WORD_SIZE:
        raise ValueError(f"{len(value)} bytes do not fit in a topic")
    return value.rjust(WORD_SIZE, b"\x00")


def encode_topic_bytes(value: Any, typ: TypeDescriptor | None = None) -> bytes:
    """Encode one filter value as a raw 32-byte topic word."""
    if isinstance(typ, (StringType, DynamicBytesType)):
        raw = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        return keccak(raw)
    if isinstance(typ, AddressType) or (typ is None and isinstance(value, str) and is_address(value)):
        return _left_pad(to_canonical_address(value))
    if isinstance(typ, FixedBytesType):
        raw = bytes(value)
        if len(raw) > typ.length:
            raise ValueError(f"{len(raw)} bytes do not fit in bytes{typ.length}")
        return raw.ljust(WORD_SIZE, b"\x00")
    if isinstance(value, bool):
        return _int_word(int(value))
    if isinstance(value, int):
        return _int_word(value)
    if isinstance(value, (bytes, bytearray)):
        return _left_pad(bytes(value))
    if isinstance(value, str):
        return keccak(text=value)
    raise TypeError(f"Cannot encode {type(value).__name__} as a topic")


def encode_topic(value: Any, typ: TypeDescriptor | None = None) -> str:
    """Encode one filter value as a 0x-prefixed topic."""
    return encode_hex(encode_topic_bytes(value, typ))


def build_topic_filter(event: EventSpec, values: Mapping[str, Any] | None = None) -> TopicFilter:
    """Build the `topics` filter for `event`; unset indexed params match anything.

    A list value becomes an OR of its encoded members.
    """
    values = values or {}
    indexed = event.indexed
    unknown = set(values) - {p.name for p in indexed}
    if unknown:
        raise ValueError(f"{event.name} has no indexed parameters {sorted(unknown)}")

    out: TopicFilter = [] if event.anonymous else [event.topic0]
    for p in indexed:
        v = values.get(p.name)
        if v is None:
            out.append(None)
        elif isinstance(v, list):
            out.append([encode_topic(x, p.type) for x in v])
        else:
            out.append(encode_topic(v, p.type))

    # Trailing wildcards are implicit
    while out and out[-1] is None:
        out.pop()
    return out
