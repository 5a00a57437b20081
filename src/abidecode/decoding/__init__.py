"""ABI head/tail decoding.

This package provides:
- Type descriptors and their static/dynamic layout classification
- A type-string parser for canonical and ABI JSON type notation
- The value, sequence and event log decoders
- Event specs, registries and topic filter encoding
"""

from abidecode.decoding.decoder import (
    decode,
    decode_function_input,
    decode_function_result,
    decode_params,
)
from abidecode.decoding.events import decode_event, decode_log
from abidecode.decoding.parser import parse_type, parse_types, type_from_abi
from abidecode.decoding.registry import add_event_spec, add_many, lookup, make_registry
from abidecode.decoding.registry_builder import event_spec_from_signature, registry_from_signatures
from abidecode.decoding.specs import EventParam, EventRegistry, EventSpec
from abidecode.decoding.topics import build_topic_filter, encode_topic
from abidecode.decoding.types import (
    AddressType,
    ArraySize,
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
    array_size,
    canonical_name,
    head_size,
    is_array,
    is_static,
)
from abidecode.decoding.values import decode_one

__all__ = [
    "decode",
    "decode_one",
    "decode_params",
    "decode_function_input",
    "decode_function_result",
    "decode_event",
    "decode_log",
    "parse_type",
    "parse_types",
    "type_from_abi",
    "add_event_spec",
    "add_many",
    "lookup",
    "make_registry",
    "event_spec_from_signature",
    "registry_from_signatures",
    "EventParam",
    "EventRegistry",
    "EventSpec",
    "build_topic_filter",
    "encode_topic",
    "AddressType",
    "ArraySize",
    "ArrayType",
    "BoolType",
    "DynamicBytesType",
    "FixedBytesType",
    "FunctionType",
    "IntType",
    "StringType",
    "TupleType",
    "TypeDescriptor",
    "UIntType",
    "array_size",
    "canonical_name",
    "head_size",
    "is_array",
    "is_static",
]
