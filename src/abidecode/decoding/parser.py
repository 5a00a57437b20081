"""Parse ABI type strings into `TypeDescriptor` trees.

Supports the canonical forms (`uint256`, `bytes32`, `string`, `address[]`,
`(uint8,bool)[2]`, ...), the `tuple(...)` spelling, and ABI JSON entries where
`type == "tuple"` (optionally with array suffixes) and members come from
`components`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from abidecode.core.errors import InvalidABIType
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
)

_ARRAY_SUFFIX = re.compile(r"\[(\d*)\]$")
_SIZED = re.compile(r"^(uint|int|bytes)(\d+)$")

_ELEMENTARY: dict[str, TypeDescriptor] = {
    "uint": UIntType(256),
    "int": IntType(256),
    "address": AddressType(),
    "bool": BoolType(),
    "string": StringType(),
    "bytes": DynamicBytesType(),
    "function": FunctionType(),
}


def split_top_level(params_str: str) -> list[str]:
    """Split a comma separated list while respecting nested parentheses."""
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == "(":
            depth += 1
            buf.append(ch)
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise InvalidABIType(f"Unbalanced parentheses in {params_str!r}")
            buf.append(ch)
        elif ch == "," and depth == 0:
            items.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise InvalidABIType(f"Unbalanced parentheses in {params_str!r}")
    if buf:
        items.append("".join(buf).strip())
    return [i for i in items if i]


def _parse_elementary(name: str) -> TypeDescriptor:
    if name in _ELEMENTARY:
        return _ELEMENTARY[name]
    m = _SIZED.match(name)
    if m is None:
        raise InvalidABIType(f"Unknown ABI type: {name!r}")
    base, size = m.group(1), int(m.group(2))
    # widths are validated by the descriptors themselves
    if base == "bytes":
        return FixedBytesType(size)
    return UIntType(size) if base == "uint" else IntType(size)


def _strip_arrays(type_str: str) -> tuple[str, list[int | None]]:
    """Peel array suffixes off the right; returns (base, dims inner→outer)."""
    dims: list[int | None] = []
    s = type_str
    while True:
        m = _ARRAY_SUFFIX.search(s)
        if m is None:
            break
        dims.append(int(m.group(1)) if m.group(1) else None)
        s = s[: m.start()].rstrip()
    dims.reverse()
    return s, dims


def _wrap_arrays(base: TypeDescriptor, dims: Iterable[int | None]) -> TypeDescriptor:
    t = base
    for length in dims:
        t = ArrayType(t, length)
    return t


def parse_type(type_str: str) -> TypeDescriptor:
    """Parse one type string, e.g. `"(address,uint256[])[3]"`."""
    s = "".join(type_str.split())
    if not s:
        raise InvalidABIType("Empty ABI type")
    base, dims = _strip_arrays(s)
    if base.startswith("tuple("):
        base = base[len("tuple"):]
    if base.startswith("("):
        if not base.endswith(")"):
            raise InvalidABIType(f"Malformed tuple type: {type_str!r}")
        members = tuple(parse_type(p) for p in split_top_level(base[1:-1]))
        return _wrap_arrays(TupleType(members), dims)
    return _wrap_arrays(_parse_elementary(base), dims)


def parse_types(types: str | Iterable[str]) -> list[TypeDescriptor]:
    """Parse `"uint256,string"` or an iterable of type strings."""
    if isinstance(types, str):
        types = split_top_level(types)
    return [parse_type(t) for t in types]


def type_from_abi(type_str: str, components: Iterable[Mapping[str, Any] | Any] | None = None) -> TypeDescriptor:
    """Build a descriptor from an ABI JSON `type` plus optional `components`.

    Components may be plain dicts or objects with `type`/`components` attributes.
    """
    s = "".join(type_str.split())
    base, dims = _strip_arrays(s)
    if base != "tuple":
        return parse_type(s)
    if components is None:
        raise InvalidABIType(f"Tuple type {type_str!r} without components")
    members = []
    for c in components:
        if isinstance(c, Mapping):
            members.append(type_from_abi(c["type"], c.get("components")))
        else:
            members.append(type_from_abi(c.type, c.components))
    return _wrap_arrays(TupleType(tuple(members)), dims)
