"""Decode one ABI value of one type.

`decode_one` resolves the value's payload (in place or through an offset),
then decodes it according to the type, recursing into arrays and tuples.
It returns the value together with how far the caller's cursor must advance:
the head size for static values, one 32-byte offset slot for dynamic ones.

Every precondition failure raises `DecodeFailure`; composite values are
never returned partially populated. A `DecodeBudget` shared by one top-level
call bounds the total number of elements and payload words produced, so
offsets that alias one sub-payload cannot multiply the work.
"""

from __future__ import annotations

from collections.abc import Sequence

from eth_utils import to_checksum_address

from abidecode.constants import WORD_SIZE
from abidecode.core.config import DecoderConfig, resolve_config
from abidecode.core.errors import DecodeFailure
from abidecode.core.models import DecodedValue
from abidecode.decoding.resolver import read_word, resolve
from abidecode.decoding.types import (
    AddressType,
    ArrayType,
    BoolType,
    DynamicBytesType,
    FixedBytesType,
    FunctionType,
    IntType,
    StringType,
    TupleType,
    TypeDescriptor,
    UIntType,
    head_size,
    is_static,
)

Buffer = bytes | bytearray | memoryview


def as_view(buffer: Buffer) -> memoryview:
    return buffer if isinstance(buffer, memoryview) else memoryview(buffer)


def check_buffer_size(view: memoryview, cfg: DecoderConfig) -> None:
    if len(view) > cfg.max_buffer_size:
        raise DecodeFailure(f"Buffer of {len(view)} bytes exceeds limit of {cfg.max_buffer_size}")


class DecodeBudget:
    """Units of work left for one top-level decode call."""

    __slots__ = ("remaining",)

    def __init__(self, limit: int) -> None:
        self.remaining = limit

    def charge(self, units: int, what: str) -> None:
        if units > self.remaining:
            raise DecodeFailure(f"{what}: {units} more elements exceed the decode limit")
        self.remaining -= units


def _need(payload: memoryview, size: int, what: str) -> None:
    if len(payload) < size:
        raise DecodeFailure(f"{what}: need {size} bytes, have {len(payload)}")


def _signed_word(word: memoryview, bits: int) -> int:
    """Two's complement 256-bit word, truncating remainder modulo 2**bits."""
    v = int.from_bytes(word, "big", signed=True)
    r = abs(v) % (1 << bits)
    return -r if v < 0 else r


def _sized_payload(payload: memoryview, what: str, budget: DecodeBudget) -> memoryview:
    """Return the bytes of a length-prefixed payload (string / bytes)."""
    length = read_word(payload, 0)
    _need(payload, WORD_SIZE + length, what)
    budget.charge(length // WORD_SIZE, what)
    return payload[WORD_SIZE : WORD_SIZE + length]


def _decode_run(
    types: Sequence[TypeDescriptor],
    buffer: memoryview,
    cursor: int,
    cfg: DecoderConfig,
    depth: int,
    budget: DecodeBudget,
) -> tuple[list[DecodedValue], int]:
    """Decode `types` back to back from `cursor`; returns (values, bytes advanced)."""
    budget.charge(len(types), "Composite value")
    values: list[DecodedValue] = []
    pos = cursor
    for t in types:
        v, used = decode_one(t, buffer, pos, config=cfg, depth=depth, budget=budget)
        values.append(v)
        pos += used
    return values, pos - cursor


def _decode_dynamic_array(
    element: TypeDescriptor,
    payload: memoryview,
    cfg: DecoderConfig,
    depth: int,
    budget: DecodeBudget,
) -> list[DecodedValue]:
    count = read_word(payload, 0)
    # zero-size elements pass the length checks below, so bound the count first
    if count > budget.remaining:
        raise DecodeFailure(f"Array length {count} exceeds the decode limit")
    if is_static(element):
        # uint[] like: elements follow the length word in place
        _need(payload, WORD_SIZE + count * head_size(element), "Dynamic array")
        values, _ = _decode_run([element] * count, payload, WORD_SIZE, cfg, depth, budget)
        return values
    # string[] / tuple[] like: offsets are relative to the word after the length
    tail = payload[WORD_SIZE:]
    _need(tail, count * WORD_SIZE, "Dynamic array heads")
    values, _ = _decode_run([element] * count, tail, 0, cfg, depth, budget)
    return values


def decode_one(
    typ: TypeDescriptor,
    buffer: Buffer,
    cursor: int = 0,
    *,
    config: DecoderConfig | None = None,
    depth: int = 0,
    budget: DecodeBudget | None = None,
) -> tuple[DecodedValue, int]:
    """Decode the value of `typ` at `cursor`; returns `(value, bytes_consumed)`.

    Without `budget` this is a top-level call: the buffer size is checked and
    a fresh budget is started from the config.
    """
    cfg = resolve_config(config)
    view = as_view(buffer)
    if budget is None:
        check_buffer_size(view, cfg)
        budget = DecodeBudget(cfg.element_limit)
    if depth > cfg.max_depth:
        raise DecodeFailure(f"Nesting deeper than {cfg.max_depth}")

    payload, next_cursor = resolve(typ, view, cursor)
    advance = next_cursor - cursor

    match typ:
        case UIntType(bits=bits):
            _need(payload, WORD_SIZE, "uint")
            return int.from_bytes(payload[:WORD_SIZE], "big") % (1 << bits), head_size(typ)

        case IntType(bits=bits):
            _need(payload, WORD_SIZE, "int")
            return _signed_word(payload[:WORD_SIZE], bits), head_size(typ)

        case AddressType():
            _need(payload, WORD_SIZE, "address")
            return to_checksum_address(bytes(payload[12:WORD_SIZE])), head_size(typ)

        case BoolType():
            _need(payload, WORD_SIZE, "bool")
            v = int.from_bytes(payload[:WORD_SIZE], "big")
            if v not in (0, 1):
                raise DecodeFailure(f"Invalid bool encoding: {v}")
            return v == 1, head_size(typ)

        case FixedBytesType(length=length):
            _need(payload, WORD_SIZE, f"bytes{length}")
            return bytes(payload[:length]), head_size(typ)

        case StringType():
            raw = _sized_payload(payload, "string", budget)
            try:
                return bytes(raw).decode("utf-8"), advance
            except UnicodeDecodeError as e:
                raise DecodeFailure(f"Invalid UTF-8 in string: {e}") from e

        case DynamicBytesType():
            return bytes(_sized_payload(payload, "bytes", budget)), advance

        case ArrayType(element=element, length=None):
            return _decode_dynamic_array(element, payload, cfg, depth + 1, budget), advance

        case ArrayType(element=element, length=length):
            values, used = _decode_run([element] * length, payload, 0, cfg, depth + 1, budget)
            return values, (used if is_static(element) else advance)

        case TupleType(members=members):
            values, used = _decode_run(members, payload, 0, cfg, depth + 1, budget)
            return tuple(values), (used if is_static(typ) else advance)

        case FunctionType():
            _need(payload, WORD_SIZE, "function")
            return bytes(payload[8:WORD_SIZE]), head_size(typ)

    raise DecodeFailure(f"Unsupported type descriptor: {typ!r}")
