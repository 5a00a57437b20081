from __future__ import annotations

from .constants import APPROVAL_FOR_ALL_T0, APPROVAL_T0, TRANSFER_T0
from .core.config import DecoderConfig
from .core.errors import DecodeFailure, InvalidABIType
from .core.models import DecodedLog, DecodedValue, EventLog, to_jsonable
from .decoding.decoder import decode, decode_function_input, decode_function_result, decode_params
from .decoding.events import decode_event, decode_log
from .decoding.parser import parse_type, parse_types
from .decoding.registry import add_event_spec, add_many, make_registry
from .decoding.registry_builder import event_spec_from_signature, registry_from_signatures
from .decoding.specs import EventParam, EventRegistry, EventSpec
from .decoding.values import decode_one

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
    "make_registry",
    "add_event_spec",
    "add_many",
    "event_spec_from_signature",
    "registry_from_signatures",
    "EventParam",
    "EventSpec",
    "EventRegistry",
    "DecoderConfig",
    "DecodeFailure",
    "InvalidABIType",
    "DecodedLog",
    "DecodedValue",
    "EventLog",
    "to_jsonable",
    "TRANSFER_T0",
    "APPROVAL_T0",
    "APPROVAL_FOR_ALL_T0",
]
