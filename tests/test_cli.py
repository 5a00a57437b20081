import json

from click.testing import CliRunner
from eth_abi import encode

from conftest import word

from abidecode.cli import cli
from abidecode.constants import TRANSFER_T0

HOLDER_TOPIC = "0x" + "00" * 12 + "d8da6bf26964af9d7eed9e03e53415d37aa96045"
SPENDER_TOPIC = "0x" + "00" * 12 + "1234567890123456789012345678901234567890"


def test_decode_command() -> None:
    data = "0x" + encode(["uint256", "string"], [2**200, "abc"]).hex()
    result = CliRunner().invoke(cli, ["decode", "uint256,string", data])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [str(2**200), "abc"]


def test_decode_command_failure() -> None:
    result = CliRunner().invoke(cli, ["decode", "bool", "0x" + word(2).hex()])
    assert result.exit_code == 1
    assert "DecodeFailure" in result.output


def test_decode_command_bad_type() -> None:
    result = CliRunner().invoke(cli, ["decode", "uint7", "0x"])
    assert result.exit_code == 1
    assert "InvalidABIType" in result.output


def test_max_depth_option() -> None:
    data = "0x" + word(1).hex()
    result = CliRunner().invoke(cli, ["--max-depth", "1", "decode", "((uint256))", data])
    assert result.exit_code == 1
    assert "Nesting" in result.output


def test_decode_log_by_registry(erc20_abi_path) -> None:
    args = [
        "decode-log",
        "--abi", str(erc20_abi_path),
        "--topic", TRANSFER_T0,
        "--topic", HOLDER_TOPIC,
        "--topic", SPENDER_TOPIC,
        "--data", "0x" + word(5).hex(),
    ]
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 0, result.output
    out = json.loads(result.output)
    assert out["event"] == "Transfer"
    assert out["values"]["value"] == 5
    assert out["values"]["from"].lower() == "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


def test_decode_log_anonymous_by_name(erc20_abi_path) -> None:
    args = [
        "decode-log",
        "--abi", str(erc20_abi_path),
        "--event", "Note",
        "--topic", "0x" + "ab" * 32,
        "--topic", HOLDER_TOPIC,
        "--data", "0x" + encode(["bytes"], [b"\xbe\xef"]).hex(),
    ]
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["values"]["payload"] == "0xbeef"


def test_decode_log_unknown_topic(erc20_abi_path) -> None:
    result = CliRunner().invoke(cli, ["decode-log", "--abi", str(erc20_abi_path), "--topic", "0x" + "00" * 32])
    assert result.exit_code == 1
    assert "No event" in result.output


def test_decode_result(erc20_abi_path) -> None:
    args = ["decode-result", "--abi", str(erc20_abi_path), "--function", "balanceOf", "0x" + word(42).hex()]
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"balance": 42}


def test_topics_command(erc20_abi_path) -> None:
    result = CliRunner().invoke(cli, ["topics", "--abi", str(erc20_abi_path)])
    assert result.exit_code == 0, result.output
    assert "Transfer" in result.output
    assert "FeesSet" in result.output


def test_max_elements_option() -> None:
    data = "0x" + encode(["uint256[]"], [[1, 2, 3]]).hex()
    assert CliRunner().invoke(cli, ["decode", "uint256[]", data]).exit_code == 0
    result = CliRunner().invoke(cli, ["--max-elements", "2", "decode", "uint256[]", data])
    assert result.exit_code == 1
    assert "decode limit" in result.output
