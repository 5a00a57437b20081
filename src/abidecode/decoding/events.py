"""Event log decoder.

Translates a raw log (topic words + data blob) into a mapping of decoded
values using an `EventSpec`:
- indexed parameters come from topics[1:], one word each
- non-indexed parameters are decoded as one sequence from `data`
- values are keyed by their declaration index ("0", "1", ...) and, when the
  parameter is named, by name as well
"""

from __future__ import annotations

import logging

from eth_utils import encode_hex

from abidecode.constants import WORD_SIZE
from abidecode.core.config import DecoderConfig, resolve_config
from abidecode.core.errors import DecodeFailure
from abidecode.core.models import DecodedLog, DecodedValue, EventLog
from abidecode.decoding.decoder import decode
from abidecode.decoding.registry import lookup
from abidecode.decoding.specs import EventRegistry, EventSpec
from abidecode.decoding.types import FixedBytesType, TypeDescriptor, head_size, is_array, is_static
from abidecode.decoding.values import decode_one

logger = logging.getLogger(__name__)

_TOPIC_TYPE = FixedBytesType(WORD_SIZE)


def topic_value_type(typ: TypeDescriptor) -> TypeDescriptor:
    """Type used to read an indexed parameter back from its topic word.

    Only single-word static values survive as themselves; strings, bytes,
    arrays and larger tuples are stored as their keccak hash.
    """
    if is_static(typ) and not is_array(typ) and head_size(typ) == WORD_SIZE:
        return typ
    return _TOPIC_TYPE


def _check_topics(event: EventSpec, topics: tuple[bytes, ...], n_indexed: int) -> None:
    if not event.anonymous and (not topics or topics[0] != event.topic_hash):
        got = encode_hex(topics[0]) if topics else "none"
        raise DecodeFailure(f"Topic0 {got} does not match {event.signature} ({event.topic0})")
    if len(topics) == 1 and n_indexed > 0:
        raise DecodeFailure(f"{event.name}: log carries no indexed topics, expected {n_indexed}")
    if len(topics) != n_indexed + 1:
        raise DecodeFailure(f"{event.name}: expected {n_indexed + 1} topics, got {len(topics)}")
    for t in topics:
        if len(t) != WORD_SIZE:
            raise DecodeFailure(f"{event.name}: topic of {len(t)} bytes, expected {WORD_SIZE}")


def decode_log(
    event: EventSpec,
    log: EventLog,
    *,
    config: DecoderConfig | None = None,
) -> dict[str, DecodedValue]:
    """Decode one log against `event`; raises `DecodeFailure` on any mismatch."""
    cfg = resolve_config(config)
    indexed = event.indexed
    non_indexed = event.non_indexed
    _check_topics(event, log.topics, len(indexed))

    indexed_values = [
        decode_one(topic_value_type(p.type), log.topics[i + 1], config=cfg)[0]
        for i, p in enumerate(indexed)
    ]
    data_values = decode([p.type for p in non_indexed], log.data, config=cfg)

    # Merge in declaration order
    out: dict[str, DecodedValue] = {}
    it_indexed = iter(indexed_values)
    it_data = iter(data_values)
    for i, p in enumerate(event.params):
        value = next(it_indexed) if p.indexed else next(it_data)
        out[str(i)] = value
        if p.name:
            out[p.name] = value
    return out


def decode_event(
    log: EventLog,
    registry: EventRegistry,
    *,
    config: DecoderConfig | None = None,
) -> DecodedLog | None:
    """Look up the log's topic0 in `registry` and decode it.

    Returns None when the log has no topics or its topic0 is not registered.
    """
    if not log.topics:
        return None
    spec = lookup(registry, log.topics[0])
    if spec is None:
        logger.debug("No event registered for topic0 %s", encode_hex(log.topics[0]))
        return None
    return DecodedLog(name=spec.name, values=decode_log(spec, log, config=config), address=log.address)
