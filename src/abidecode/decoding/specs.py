"""Event specification primitives and registry typing.

Defines lightweight dataclasses to describe how to decode events:
- `EventParam`: one event parameter (name, type descriptor, indexed flag)
- `EventSpec`: one event (name, ordered params, anonymous flag, topic0)
- `EventRegistry`: mapping from topic0 → EventSpec
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import decode_hex
from eth_utils.abi import event_signature_to_log_topic

from abidecode.decoding.types import TypeDescriptor, canonical_name


@dataclass(frozen=True)
class EventParam:
    """Describe one event parameter; `indexed` params travel in topics."""

    name: str
    type: TypeDescriptor
    indexed: bool = False


@dataclass(frozen=True)
class EventSpec:
    """One event definition. `topic0` defaults to keccak of the canonical signature."""

    name: str
    params: tuple[EventParam, ...]
    anonymous: bool = False
    topic0: str = ""

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))
        if not self.topic0:
            object.__setattr__(self, "topic0", "0x" + event_signature_to_log_topic(self.signature).hex())
        else:
            object.__setattr__(self, "topic0", self.topic0.lower())

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(canonical_name(p.type) for p in self.params)})"

    @property
    def topic_hash(self) -> bytes:
        return decode_hex(self.topic0)

    @property
    def indexed(self) -> list[EventParam]:
        return [p for p in self.params if p.indexed]

    @property
    def non_indexed(self) -> list[EventParam]:
        return [p for p in self.params if not p.indexed]


# The full registry keyed by topic0 (lowercased 0x-hex).
EventRegistry = dict[str, EventSpec]
