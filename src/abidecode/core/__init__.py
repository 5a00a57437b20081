from abidecode.core.config import DecoderConfig
from abidecode.core.errors import DecodeFailure, InvalidABIType
from abidecode.core.models import DecodedLog, DecodedValue, EventLog, to_jsonable

__all__ = [
    "DecoderConfig",
    "DecodeFailure",
    "InvalidABIType",
    "DecodedLog",
    "DecodedValue",
    "EventLog",
    "to_jsonable",
]
