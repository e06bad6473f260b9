"""Contract interface built from a JSON ABI: log decoding and call-data encoding via eth_abi."""

from typing import Any, Sequence

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_utils import event_abi_to_log_topic, function_abi_to_4byte_selector, to_checksum_address
from pydantic import BaseModel


class LogDecodeError(ValueError):
    """A log does not match any event of the interface."""


class DecodedLog(BaseModel):
    name: str
    address: str
    args: dict[str, Any] = {}


def event_abi(name: str, *inputs: tuple[str, str, bool]) -> dict:
    """Build an event ABI entry from (type, name, indexed) triples."""
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [{"type": t, "name": n, "indexed": idx} for t, n, idx in inputs],
    }


def view_function_abi(name: str, outputs: Sequence[str], inputs: Sequence[str] = ()) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"type": t, "name": ""} for t in inputs],
        "outputs": [{"type": t, "name": ""} for t in outputs],
    }


def to_bytes(value: Any) -> bytes:
    """Accept hex strings or bytes-like RPC values (HexBytes included)."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith("0x") else value)
    raise TypeError(f"Cannot convert {type(value).__name__} to bytes")


def _is_dynamic(abi_type: str) -> bool:
    # Indexed dynamic values are stored as their keccak hash, not decodable
    return abi_type in ("string", "bytes") or abi_type.endswith("]") or abi_type.startswith(("(", "tuple"))


class ContractInterface:
    def __init__(self, abi: list[dict]) -> None:
        self.abi = abi
        self._events_by_topic: dict[bytes, dict] = {}
        self._events_by_name: dict[str, dict] = {}
        self._functions: dict[str, dict] = {}
        for item in abi:
            if item.get("type") == "event":
                self._events_by_topic[event_abi_to_log_topic(item)] = item
                self._events_by_name[item["name"]] = item
            elif item.get("type") == "function":
                self._functions[item["name"]] = item

    def event_topic(self, name: str) -> str:
        return "0x" + event_abi_to_log_topic(self._events_by_name[name]).hex()

    def parse_log(self, log: dict) -> DecodedLog:
        """Decode a raw log against the interface's events. Raises LogDecodeError on mismatch."""
        topics = [to_bytes(t) for t in log.get("topics") or []]
        if not topics:
            raise LogDecodeError("Log has no topics")

        event = self._events_by_topic.get(topics[0])
        if event is None:
            raise LogDecodeError(f"Unknown topic 0x{topics[0].hex()}")

        indexed = [i for i in event["inputs"] if i.get("indexed")]
        non_indexed = [i for i in event["inputs"] if not i.get("indexed")]
        if len(topics) - 1 != len(indexed):
            raise LogDecodeError(f"{event['name']}: expected {len(indexed)} indexed topics, got {len(topics) - 1}")

        args: dict[str, Any] = {}
        try:
            for inp, topic in zip(indexed, topics[1:]):
                args[inp["name"]] = topic if _is_dynamic(inp["type"]) else abi_decode([inp["type"]], topic)[0]
            values = abi_decode([i["type"] for i in non_indexed], to_bytes(log.get("data") or b""))
        except DecodingError as e:
            raise LogDecodeError(f"{event['name']}: {e}") from e

        for inp, value in zip(non_indexed, values):
            args[inp["name"]] = value

        return DecodedLog(name=event["name"], address=to_checksum_address(log["address"]), args=args)

    def encode_function_data(self, name: str, args: Sequence[Any] = ()) -> str:
        fn = self._functions[name]
        selector = function_abi_to_4byte_selector(fn)
        encoded = abi_encode([i["type"] for i in fn["inputs"]], list(args))
        return "0x" + (selector + encoded).hex()

    def decode_function_result(self, name: str, data: Any) -> tuple:
        """Decode return data. Raises eth_abi DecodingError on empty or malformed data."""
        fn = self._functions[name]
        return abi_decode([o["type"] for o in fn["outputs"]], to_bytes(data))
