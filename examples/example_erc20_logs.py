from pathlib import Path

from abidecode import EventLog, decode_event, to_jsonable
from abidecode.abi import make_event_registry_from_abi
from abidecode.decoding.registries import make_erc20_registry
from abidecode.decoding.topics import build_topic_filter

EXAMPLES_ROOT = Path(__file__).parent
ABI = EXAMPLES_ROOT.parent / "tests" / "abi" / "erc20_abi.json"

# An eth_getLogs entry for a USDC transfer
RAW_LOG = {
    "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
    "topics": [
        "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef",
        "0x000000000000000000000000d8da6bf26964af9d7eed9e03e53415d37aa96045",
        "0x0000000000000000000000001234567890123456789012345678901234567890",
    ],
    "data": "0x00000000000000000000000000000000000000000000000000000000000f4240",
    "blockNumber": "0x1312d00",
    "transactionHash": "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060",
    "logIndex": "0x0",
}

registry = {**make_erc20_registry(), **make_event_registry_from_abi(ABI)}

parsed = decode_event(EventLog.from_rpc(RAW_LOG), registry)
print(to_jsonable(parsed))

# topics filter for "transfers to 0x1234…" to pass to eth_getLogs
transfer = registry[RAW_LOG["topics"][0]]
print(build_topic_filter(transfer, {"to": "0x1234567890123456789012345678901234567890"}))
