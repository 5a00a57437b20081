import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Literal

from eth_utils import function_signature_to_4byte_selector
from pydantic import BaseModel

from abidecode.decoding.parser import type_from_abi
from abidecode.decoding.registry import add_event_spec
from abidecode.decoding.specs import EventParam, EventRegistry, EventSpec
from abidecode.decoding.types import TypeDescriptor, canonical_name


class AbiParam(BaseModel):
    name: str = ""
    type: str
    indexed: bool = False
    internalType: str | None = None
    components: list["AbiParam"] | None = None

    def descriptor(self) -> TypeDescriptor:
        return type_from_abi(self.type, self.components)


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiParam]
    name: str
    type: Literal["event"]


class AbiFunction(BaseModel):
    name: str
    inputs: Sequence[AbiParam] = ()
    outputs: Sequence[AbiParam] = ()
    stateMutability: str | None = None
    type: Literal["function"] = "function"

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(canonical_name(p.descriptor()) for p in self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)


AbiParam.model_rebuild()


def get_event_spec(event: AbiEvent) -> EventSpec:
    return EventSpec(
        name=event.name,
        params=tuple(EventParam(p.name, p.descriptor(), p.indexed) for p in event.inputs),
        anonymous=event.anonymous,
    )


def get_event_signature(event: AbiEvent) -> str:
    return get_event_spec(event).signature


def get_event_topic0(event: AbiEvent) -> str:
    return get_event_spec(event).topic0


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def load_abi(abi: AbiSpec) -> AbiJson:
    """Return ABI entries from a JSON file, a build artifact (`{"abi": [...]}`) or entries."""
    if isinstance(abi, Path):
        abi = json.loads(abi.read_text())
    if isinstance(abi, dict):
        abi = abi["abi"]
    return abi


def get_events_from_abi(abi: AbiSpec) -> dict[str, AbiEvent]:
    abi = load_abi(abi)
    return {entry["name"]: AbiEvent.model_validate(entry) for entry in abi if entry.get("type") == "event"}


def get_functions_from_abi(abi: AbiSpec) -> dict[str, AbiFunction]:
    abi = load_abi(abi)
    return {entry["name"]: AbiFunction.model_validate(entry) for entry in abi if entry.get("type") == "function"}


def make_event_registry_from_events(events: Iterable[AbiEvent]) -> EventRegistry:
    """Registry of all non-anonymous events (anonymous ones have no topic0)."""
    reg: EventRegistry = {}

    for event in events:
        if event.anonymous:
            continue
        add_event_spec(reg, get_event_spec(event))

    return reg


def make_event_registry_from_abi(abi: AbiSpec) -> EventRegistry:
    return make_event_registry_from_events(get_events_from_abi(abi).values())
