"""Core data models shared by the decoders and the CLI.

This module defines:
- `DecodedValue`: the Python values produced by the decoder.
- `EventLog`: a raw log record (topic words + data blob), minimally normalized.
- `DecodedLog`: a decoded event with its merged positional/named values.

Design notes
------------
- Decoded values are plain Python objects: `int` for (u)intN, checksummed
  `str` for addresses, `bytes` for bytesN / bytes / function, `str` for
  strings, `list` for arrays and `tuple` for tuples.
- `to_jsonable` is the single place where values are rendered for output
  (big ints become decimal strings, bytes become 0x-hex).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from eth_utils import decode_hex, encode_hex

DecodedValue = Union[int, bool, str, bytes, list["DecodedValue"], tuple["DecodedValue", ...]]

# JavaScript-safe integer range; anything larger is rendered as a string
_JSON_SAFE_INT = 2**53 - 1


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return decode_hex(value)


def _as_lower(value: str | None) -> str | None:
    return value.lower() if value else None


def _as_int(value: int | str | None) -> int | None:
    if value is None or isinstance(value, int):
        return value
    return int(value, 16)


# === Log records ===


@dataclass(slots=True, frozen=True)
class EventLog:
    """Raw log: ordered 32-byte topic words plus one opaque data blob."""

    topics: tuple[bytes, ...]
    data: bytes = b""
    address: str | None = None
    block_number: int | None = None
    tx_hash: str | None = None
    log_index: int | None = None

    @classmethod
    def from_hex(cls, topics: Sequence[bytes | str], data: bytes | str = b"") -> EventLog:
        """Build a log from hex strings or raw bytes."""
        return cls(topics=tuple(_as_bytes(t) for t in topics), data=_as_bytes(data))

    @classmethod
    def from_rpc(cls, raw: Mapping[str, Any]) -> EventLog:
        """Normalize an `eth_getLogs` result entry."""
        return cls(
            topics=tuple(_as_bytes(t) for t in raw.get("topics", ())),
            data=_as_bytes(raw.get("data") or b""),
            address=_as_lower(raw.get("address")),
            block_number=_as_int(raw.get("blockNumber")),
            tx_hash=_as_lower(raw.get("transactionHash")),
            log_index=_as_int(raw.get("logIndex")),
        )


@dataclass(slots=True)
class DecodedLog:
    """Decoded event: values keyed by positional index and by parameter name."""

    name: str
    values: dict[str, DecodedValue] = field(default_factory=dict)
    address: str | None = None

    def __getitem__(self, key: str | int) -> DecodedValue:
        return self.values[str(key)]

    def named(self) -> dict[str, DecodedValue]:
        """Return only the entries keyed by parameter name."""
        return {k: v for k, v in self.values.items() if not k.isdigit()}


# === Rendering ===


def to_jsonable(value: Any) -> Any:
    """Render a decoded value (or a mapping/sequence of them) as JSON-friendly data."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value if abs(value) <= _JSON_SAFE_INT else str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return encode_hex(bytes(value))
    if isinstance(value, DecodedLog):
        return {"name": value.name, "address": value.address, "values": to_jsonable(value.values)}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
