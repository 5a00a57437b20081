"""Locate the payload of one value inside an ABI buffer.

Static values are read in place from the head. Dynamic values hold a 32-byte
big-endian offset (relative to the start of the enclosing buffer) pointing at
their payload; the payload region runs to the end of that buffer and callers
consume only what they need.
"""

from __future__ import annotations

import logging

from abidecode.constants import MAX_OFFSET, WORD_SIZE
from abidecode.core.errors import DecodeFailure
from abidecode.decoding.types import DynamicBytesType, StringType, TypeDescriptor, head_size, is_static

logger = logging.getLogger(__name__)

# Length prefix used when a string/bytes value was emitted in place
_LEGACY_PREFIX = WORD_SIZE.to_bytes(WORD_SIZE, "big")


def read_word(buffer: memoryview, cursor: int) -> int:
    """Read the 32-byte big-endian unsigned word at `cursor`."""
    end = cursor + WORD_SIZE
    if len(buffer) < end:
        raise DecodeFailure(f"Buffer too short: need {end} bytes, have {len(buffer)}")
    return int.from_bytes(buffer[cursor:end], "big")


def resolve(typ: TypeDescriptor, buffer: memoryview, cursor: int) -> tuple[memoryview, int]:
    """Return `(payload, next_cursor)` for the value of `typ` at `cursor`."""
    if is_static(typ):
        size = head_size(typ)
        end = cursor + size
        if len(buffer) < end:
            raise DecodeFailure(f"Buffer too short for {size}-byte static value at {cursor}")
        return buffer[cursor:end], end

    next_cursor = cursor + WORD_SIZE
    offset = read_word(buffer, cursor)
    if offset <= MAX_OFFSET and offset < len(buffer):
        return buffer[offset:], next_cursor

    # Some tokens declare `string`/`bytes` but return a bytes32 in place.
    if isinstance(typ, (StringType, DynamicBytesType)):
        logger.debug("Offset %d out of range at %d; reading 32-byte in-place value", offset, cursor)
        return memoryview(_LEGACY_PREFIX + bytes(buffer[cursor:next_cursor])), next_cursor

    raise DecodeFailure(f"Invalid offset {offset} at {cursor} (buffer length {len(buffer)})")
