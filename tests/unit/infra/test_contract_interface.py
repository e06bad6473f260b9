"""Tests for ContractInterface: ABI log decoding and call encoding."""

import pytest
from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from bridgeagg.bridges.hyperlane import DEPOSIT_ABI
from bridgeagg.infra.blockchain.abi import ContractInterface, LogDecodeError, to_bytes

ROUTE = "0x" + "11" * 20
RECIPIENT = "0x" + "ab" * 20
PADDED_RECIPIENT = b"\x00" * 12 + bytes.fromhex("ab" * 20)


def _topic(signature: str) -> str:
    return "0x" + keccak(text=signature).hex()


def _sent_log(amount: int = 5000, destination: int = 10) -> dict:
    return {
        "address": ROUTE,
        "topics": [
            _topic("SentTransferRemote(uint32,bytes32,uint256)"),
            "0x" + encode(["uint32"], [destination]).hex(),
            "0x" + PADDED_RECIPIENT.hex(),
        ],
        "data": "0x" + encode(["uint256"], [amount]).hex(),
    }


@pytest.fixture()
def iface():
    return ContractInterface(DEPOSIT_ABI)


class TestParseLog:
    def test_decodes_indexed_and_data_args(self, iface):
        parsed = iface.parse_log(_sent_log())
        assert parsed.name == "SentTransferRemote"
        assert parsed.address == to_checksum_address(ROUTE)
        assert parsed.args["destination"] == 10
        assert parsed.args["recipient"] == PADDED_RECIPIENT
        assert parsed.args["amount"] == 5000

    def test_accepts_bytes_topics(self, iface):
        log = _sent_log()
        log["topics"] = [to_bytes(t) for t in log["topics"]]
        log["data"] = to_bytes(log["data"])
        assert iface.parse_log(log).args["amount"] == 5000

    def test_dynamic_data_arg(self, iface):
        log = {
            "address": ROUTE,
            "topics": [
                _topic("Dispatch(address,uint32,bytes32,bytes)"),
                "0x" + encode(["address"], [RECIPIENT]).hex(),
                "0x" + encode(["uint32"], [42161]).hex(),
                "0x" + PADDED_RECIPIENT.hex(),
            ],
            "data": "0x" + encode(["bytes"], [b"hello"]).hex(),
        }
        parsed = iface.parse_log(log)
        assert parsed.name == "Dispatch"
        assert parsed.args["message"] == b"hello"
        assert to_checksum_address(parsed.args["sender"]) == to_checksum_address(RECIPIENT)

    def test_unknown_topic_raises(self, iface):
        log = _sent_log()
        log["topics"][0] = _topic("Transfer(address,address,uint256)")
        with pytest.raises(LogDecodeError):
            iface.parse_log(log)

    def test_no_topics_raises(self, iface):
        with pytest.raises(LogDecodeError):
            iface.parse_log({"address": ROUTE, "topics": [], "data": "0x"})

    def test_topic_count_mismatch_raises(self, iface):
        log = _sent_log()
        log["topics"] = log["topics"][:2]
        with pytest.raises(LogDecodeError):
            iface.parse_log(log)

    def test_truncated_data_raises(self, iface):
        log = _sent_log()
        log["data"] = "0x1234"
        with pytest.raises(LogDecodeError):
            iface.parse_log(log)


class TestFunctions:
    def test_event_topic(self, iface):
        assert iface.event_topic("Dispatch") == _topic("Dispatch(address,uint32,bytes32,bytes)")

    def test_encode_zero_arg_call(self, iface):
        assert iface.encode_function_data("wrappedToken") == "0x" + keccak(text="wrappedToken()")[:4].hex()

    def test_decode_address_result(self, iface):
        result = iface.decode_function_result("wrappedToken", encode(["address"], [RECIPIENT]))
        assert to_checksum_address(result[0]) == to_checksum_address(RECIPIENT)
