import pytest
from eth_utils import decode_hex, keccak, to_checksum_address

from abidecode.core.models import EventLog
from abidecode.decoding.events import decode_log
from abidecode.decoding.registry_builder import event_spec_from_signature
from abidecode.decoding.topics import build_topic_filter, encode_topic
from abidecode.decoding.types import DynamicBytesType, FixedBytesType, StringType

ADDR = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def test_encode_ints() -> None:
    assert encode_topic(1) == "0x" + "00" * 31 + "01"
    assert encode_topic(-1) == "0x" + "ff" * 32
    assert encode_topic(True) == encode_topic(1)
    with pytest.raises(ValueError):
        encode_topic(2**256)


def test_encode_address_left_padded() -> None:
    assert encode_topic(ADDR) == "0x" + "00" * 12 + ADDR[2:].lower()


def test_encode_strings_are_hashed() -> None:
    assert encode_topic("hello") == "0x" + keccak(text="hello").hex()
    assert encode_topic("hello", StringType()) == "0x" + keccak(text="hello").hex()
    assert encode_topic(b"\x01", DynamicBytesType()) == "0x" + keccak(b"\x01").hex()


def test_encode_bytes() -> None:
    assert encode_topic(b"\xab\xcd") == "0x" + "00" * 30 + "abcd"
    assert encode_topic(b"\xab\xcd", FixedBytesType(2)) == "0x" + "abcd" + "00" * 30
    with pytest.raises(ValueError):
        encode_topic(b"\x00" * 33)
    with pytest.raises(ValueError):
        encode_topic(b"\x00" * 3, FixedBytesType(2))
    with pytest.raises(TypeError):
        encode_topic(1.5)


def test_build_topic_filter() -> None:
    spec = event_spec_from_signature("Transfer(address indexed from, address indexed to, uint256 value)")
    to_topic = encode_topic(ADDR)

    assert build_topic_filter(spec) == [spec.topic0]
    assert build_topic_filter(spec, {"to": ADDR}) == [spec.topic0, None, to_topic]
    assert build_topic_filter(spec, {"from": [ADDR]}) == [spec.topic0, [to_topic]]
    with pytest.raises(ValueError):
        build_topic_filter(spec, {"value": 1})


def test_encoded_topics_decode_back() -> None:
    spec = event_spec_from_signature("Moved(address indexed who, int24 indexed tick)")
    topics = [spec.topic0, encode_topic(ADDR, spec.params[0].type), encode_topic(-60, spec.params[1].type)]
    values = decode_log(spec, EventLog(topics=tuple(decode_hex(t) for t in topics)))
    assert values["who"] == to_checksum_address(ADDR)
    assert values["tick"] == -60
