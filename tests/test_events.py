import pytest
from eth_abi import encode
from eth_utils import decode_hex, keccak, to_checksum_address

from conftest import word

from abidecode.constants import TRANSFER_T0
from abidecode.core.errors import DecodeFailure
from abidecode.core.models import DecodedLog, EventLog
from abidecode.decoding.events import decode_event, decode_log, topic_value_type
from abidecode.decoding.registries import make_erc20_registry
from abidecode.decoding.registry_builder import event_spec_from_signature
from abidecode.decoding.specs import EventParam, EventSpec
from abidecode.decoding.types import (
    AddressType,
    ArrayType,
    FixedBytesType,
    StringType,
    TupleType,
    UIntType,
)


def topic_for(address: bytes) -> bytes:
    return address.rjust(32, b"\x00")


def test_single_indexed_address_keyed_by_index_and_name(holder: bytes) -> None:
    spec = EventSpec(name="Ping", params=(EventParam("from", AddressType(), indexed=True),))
    log = EventLog(topics=(spec.topic_hash, topic_for(holder)), data=b"")

    values = decode_log(spec, log)

    assert values == {"0": to_checksum_address(holder), "from": to_checksum_address(holder)}


def test_transfer(transfer_spec: EventSpec, holder: bytes, spender: bytes) -> None:
    assert transfer_spec.topic0 == TRANSFER_T0
    log = EventLog(
        topics=(decode_hex(TRANSFER_T0), topic_for(holder), topic_for(spender)),
        data=word(1000),
    )

    values = decode_log(transfer_spec, log)

    assert values["from"] == values["0"] == to_checksum_address(holder)
    assert values["to"] == values["1"] == to_checksum_address(spender)
    assert values["value"] == values["2"] == 1000


def test_mixed_order_merges_by_declaration_index(holder: bytes) -> None:
    spec = event_spec_from_signature("Swap(uint256 amountIn, address indexed sender, string memo, uint256 indexed id)")
    log = EventLog(
        topics=(spec.topic_hash, topic_for(holder), word(77)),
        data=encode(["uint256", "string"], [5, "gm"]),
    )

    values = decode_log(spec, log)

    assert [values[str(i)] for i in range(4)] == [5, to_checksum_address(holder), "gm", 77]
    assert values["memo"] == "gm"
    assert values["id"] == 77


def test_unnamed_params_only_get_positional_keys(holder: bytes) -> None:
    spec = event_spec_from_signature("Anon(address indexed, uint256)")
    log = EventLog(topics=(spec.topic_hash, topic_for(holder)), data=word(3))
    assert decode_log(spec, log) == {"0": to_checksum_address(holder), "1": 3}


def test_signature_topic_mismatch(transfer_spec: EventSpec, holder: bytes) -> None:
    log = EventLog(topics=(keccak(text="Other()"), topic_for(holder), topic_for(holder)), data=word(1))
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, log)


def test_missing_topics(transfer_spec: EventSpec, holder: bytes) -> None:
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, EventLog(topics=(transfer_spec.topic_hash,), data=word(1)))
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, EventLog(topics=(transfer_spec.topic_hash, topic_for(holder)), data=word(1)))
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, EventLog(topics=(), data=word(1)))


def test_extra_topics(transfer_spec: EventSpec, holder: bytes) -> None:
    topics = (transfer_spec.topic_hash, topic_for(holder), topic_for(holder), word(1))
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, EventLog(topics=topics, data=word(1)))


def test_short_data(transfer_spec: EventSpec, holder: bytes) -> None:
    log = EventLog(topics=(transfer_spec.topic_hash, topic_for(holder), topic_for(holder)), data=b"")
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, log)


def test_anonymous_event_skips_signature_check(holder: bytes) -> None:
    spec = event_spec_from_signature("Note(address indexed caller, bytes payload)", anonymous=True)
    log = EventLog(topics=(keccak(text="anything"), topic_for(holder)), data=encode(["bytes"], [b"\x01\x02"]))
    assert decode_log(spec, log) == {
        "0": to_checksum_address(holder),
        "caller": to_checksum_address(holder),
        "1": b"\x01\x02",
        "payload": b"\x01\x02",
    }


def test_indexed_dynamic_values_stay_hashed() -> None:
    spec = event_spec_from_signature("Named(string indexed label, uint256[] indexed ids)")
    label_hash = keccak(text="vitalik")
    ids_hash = keccak(b"ids")
    log = EventLog(topics=(spec.topic_hash, label_hash, ids_hash), data=b"")

    values = decode_log(spec, log)

    assert values["label"] == label_hash
    assert values["ids"] == ids_hash


def test_topic_value_type() -> None:
    assert topic_value_type(UIntType(8)) == UIntType(8)
    assert topic_value_type(TupleType((UIntType(256),))) == TupleType((UIntType(256),))
    for typ in [StringType(), ArrayType(UIntType(256), 1), TupleType((UIntType(256), UIntType(256)))]:
        assert topic_value_type(typ) == FixedBytesType(32)


def test_malformed_topic_width(transfer_spec: EventSpec, holder: bytes) -> None:
    log = EventLog(topics=(transfer_spec.topic_hash, holder, topic_for(holder)), data=word(1))
    with pytest.raises(DecodeFailure):
        decode_log(transfer_spec, log)


# ---------- registry-driven decoding ----------


def test_decode_event_from_rpc_log(holder: bytes, spender: bytes) -> None:
    raw = {
        "address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "topics": [TRANSFER_T0, "0x" + topic_for(holder).hex(), "0x" + topic_for(spender).hex()],
        "data": "0x" + word(25).hex(),
        "blockNumber": "0x10",
        "transactionHash": "0xABC",
        "logIndex": "0x2",
    }
    log = EventLog.from_rpc(raw)

    parsed = decode_event(log, make_erc20_registry())

    assert isinstance(parsed, DecodedLog)
    assert parsed.name == "Transfer"
    assert parsed.address == "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
    assert parsed["value"] == parsed[2] == 25
    assert parsed.named() == {
        "from": to_checksum_address(holder),
        "to": to_checksum_address(spender),
        "value": 25,
    }
    assert log.block_number == 16
    assert log.log_index == 2


def test_decode_event_unknown_topic() -> None:
    log = EventLog(topics=(keccak(text="Unknown()"),), data=b"")
    assert decode_event(log, make_erc20_registry()) is None
    assert decode_event(EventLog(topics=()), make_erc20_registry()) is None
