from pathlib import Path

import pytest

from abidecode.decoding.registry_builder import event_spec_from_signature
from abidecode.decoding.specs import EventSpec

ABI_DIR = Path(__file__).parent / "abi"


def word(n: int) -> bytes:
    """One 32-byte big-endian ABI word."""
    return n.to_bytes(32, "big")


def padded(raw: bytes) -> bytes:
    """Right-pad `raw` to a multiple of 32 bytes."""
    return raw + b"\x00" * (-len(raw) % 32)


@pytest.fixture
def erc20_abi_path() -> Path:
    path = ABI_DIR / "erc20_abi.json"
    assert path.is_file()
    return path


@pytest.fixture
def transfer_spec() -> EventSpec:
    return event_spec_from_signature("Transfer(address indexed from, address indexed to, uint256 value)")


@pytest.fixture
def holder() -> bytes:
    return bytes.fromhex("d8da6bf26964af9d7eed9e03e53415d37aa96045")


@pytest.fixture
def spender() -> bytes:
    return bytes.fromhex("1234567890123456789012345678901234567890")
