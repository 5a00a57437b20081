"""Decode an ordered list of ABI types against one buffer.

This module provides:
- `decode(types, data)`: the head/tail sequence decoder used for call results
  and event data
- `decode_params(params, data)`: same, from ABI parameter entries or type strings
- `decode_function_result` / `decode_function_input`: ABI function helpers
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from eth_utils import encode_hex

from abidecode.core.config import DecoderConfig, resolve_config
from abidecode.core.errors import DecodeFailure
from abidecode.core.models import DecodedValue
from abidecode.decoding.parser import parse_type, type_from_abi
from abidecode.decoding.types import TypeDescriptor
from abidecode.decoding.values import Buffer, DecodeBudget, as_view, check_buffer_size, decode_one

if TYPE_CHECKING:
    from abidecode.abi import AbiFunction

SELECTOR_SIZE = 4

ParamLike = Any  # TypeDescriptor, type string, ABI JSON dict or AbiParam


def decode(
    types: Sequence[TypeDescriptor],
    data: Buffer,
    *,
    config: DecoderConfig | None = None,
) -> list[DecodedValue]:
    """Decode `types` in order from the start of `data`."""
    cfg = resolve_config(config)
    view = as_view(data)
    check_buffer_size(view, cfg)
    budget = DecodeBudget(cfg.element_limit)
    budget.charge(len(types), "Value list")

    values: list[DecodedValue] = []
    cursor = 0
    for t in types:
        v, consumed = decode_one(t, view, cursor, config=cfg, budget=budget)
        values.append(v)
        cursor += consumed

    if len(values) != len(types):
        raise DecodeFailure(f"Decoded {len(values)} values for {len(types)} types")
    return values


def as_descriptor(param: ParamLike) -> TypeDescriptor:
    """Coerce a type string, ABI JSON dict or ABI param model into a descriptor."""
    if isinstance(param, str):
        return parse_type(param)
    if isinstance(param, Mapping):
        return type_from_abi(param["type"], param.get("components"))
    if hasattr(param, "components") and isinstance(getattr(param, "type", None), str):
        return type_from_abi(param.type, param.components)
    return param


def decode_params(
    params: Sequence[ParamLike],
    data: Buffer,
    *,
    config: DecoderConfig | None = None,
) -> list[DecodedValue]:
    return decode([as_descriptor(p) for p in params], data, config=config)


def decode_function_result(
    function: AbiFunction,
    data: Buffer,
    *,
    config: DecoderConfig | None = None,
) -> list[DecodedValue]:
    """Decode the return data of an `eth_call` against the function's outputs."""
    return decode_params(function.outputs, data, config=config)


def decode_function_input(
    function: AbiFunction,
    calldata: Buffer,
    *,
    config: DecoderConfig | None = None,
) -> list[DecodedValue]:
    """Check the 4-byte selector of `calldata`, then decode the arguments."""
    view = as_view(calldata)
    if len(view) < SELECTOR_SIZE:
        raise DecodeFailure("Calldata shorter than a function selector")
    selector = bytes(view[:SELECTOR_SIZE])
    if selector != function.selector:
        raise DecodeFailure(
            f"Selector {encode_hex(selector)} does not match {function.signature} ({encode_hex(function.selector)})"
        )
    return decode_params(function.inputs, view[SELECTOR_SIZE:], config=config)
