"""ABI type descriptors and their layout classification.

Defines a closed set of frozen dataclasses, one per ABI parameter kind, and
pure functions over them:
- `is_static(t)`: whether the encoding has a fixed size known from the type alone
- `head_size(t)`: bytes the value occupies in the head section of its parent
- `array_size(t)`: array shape (not an array / fixed length / dynamic length)
- `canonical_name(t)`: canonical type string used in signatures
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from abidecode.constants import WORD_SIZE
from abidecode.core.errors import InvalidABIType


def _check_bits(kind: str, bits: int) -> None:
    if not (0 < bits <= 256 and bits % 8 == 0):
        raise InvalidABIType(f"Invalid bit width for {kind}: {bits}")


@dataclass(frozen=True, slots=True)
class UIntType:
    bits: int = 256

    def __post_init__(self) -> None:
        _check_bits("uint", self.bits)


@dataclass(frozen=True, slots=True)
class IntType:
    bits: int = 256

    def __post_init__(self) -> None:
        _check_bits("int", self.bits)


@dataclass(frozen=True, slots=True)
class AddressType:
    pass


@dataclass(frozen=True, slots=True)
class BoolType:
    pass


@dataclass(frozen=True, slots=True)
class FixedBytesType:
    length: int  # 1..32

    def __post_init__(self) -> None:
        if not 0 < self.length <= WORD_SIZE:
            raise InvalidABIType(f"Invalid length for bytesN: {self.length}")


@dataclass(frozen=True, slots=True)
class StringType:
    pass


@dataclass(frozen=True, slots=True)
class DynamicBytesType:
    pass


@dataclass(frozen=True, slots=True)
class ArrayType:
    element: TypeDescriptor
    length: int | None = None  # None → dynamic size


@dataclass(frozen=True, slots=True)
class TupleType:
    members: tuple[TypeDescriptor, ...]


@dataclass(frozen=True, slots=True)
class FunctionType:
    """address (20 bytes) + selector (4 bytes), encoded like bytes24."""


TypeDescriptor = (
    UIntType
    | IntType
    | AddressType
    | BoolType
    | FixedBytesType
    | StringType
    | DynamicBytesType
    | ArrayType
    | TupleType
    | FunctionType
)


class ArraySize(enum.Enum):
    NOT_ARRAY = "not_array"
    STATIC = "static"
    DYNAMIC = "dynamic"


def is_static(t: TypeDescriptor) -> bool:
    """Return True when `t` encodes in place, without an offset indirection."""
    match t:
        case StringType() | DynamicBytesType():
            return False
        case ArrayType(element=element, length=length):
            return length is not None and is_static(element)
        case TupleType(members=members):
            return all(is_static(m) for m in members)
        case _:
            return True


def head_size(t: TypeDescriptor) -> int:
    """Size in bytes of `t` in its parent's head section ("memory usage")."""
    if not is_static(t):
        return WORD_SIZE
    match t:
        case ArrayType(element=element, length=length):
            return (length or 0) * head_size(element)
        case TupleType(members=members):
            return sum(head_size(m) for m in members)
        case _:
            return WORD_SIZE


def array_size(t: TypeDescriptor) -> ArraySize:
    match t:
        case ArrayType(length=None):
            return ArraySize.DYNAMIC
        case ArrayType():
            return ArraySize.STATIC
        case _:
            return ArraySize.NOT_ARRAY


def is_array(t: TypeDescriptor) -> bool:
    return array_size(t) is not ArraySize.NOT_ARRAY


def canonical_name(t: TypeDescriptor) -> str:
    """Canonical ABI type string, e.g. `uint256`, `(address,bytes32)[2]`."""
    match t:
        case UIntType(bits=bits):
            return f"uint{bits}"
        case IntType(bits=bits):
            return f"int{bits}"
        case AddressType():
            return "address"
        case BoolType():
            return "bool"
        case FixedBytesType(length=length):
            return f"bytes{length}"
        case StringType():
            return "string"
        case DynamicBytesType():
            return "bytes"
        case FunctionType():
            return "function"
        case ArrayType(element=element, length=length):
            return f"{canonical_name(element)}[{'' if length is None else length}]"
        case TupleType(members=members):
            return "(" + ",".join(canonical_name(m) for m in members) + ")"
    raise TypeError(f"Unsupported type descriptor: {t!r}")
