"""Declarative event descriptors: which logs count as bridge transfers and how to read them."""

import logging
from typing import Any, Callable

from eth_utils import keccak, to_checksum_address
from pydantic import BaseModel

from bridgeagg.domain.enums import ArgTransform, CompanionCheck
from bridgeagg.infra.blockchain.abi import ContractInterface, LogDecodeError, to_bytes
from bridgeagg.infra.blockchain.evm.provider import EvmProvider

logger = logging.getLogger(__name__)


def bytes32_to_address(value: Any) -> str:
    """Left-padded 32-byte word -> checksummed address from its low 20 bytes."""
    raw = to_bytes(value)
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}")
    return to_checksum_address(raw[-20:])


ARG_TRANSFORMS: dict[ArgTransform, Callable[[Any], Any]] = {
    ArgTransform.BYTES32_TO_ADDRESS: bytes32_to_address,
}


class CompanionEventFilter(BaseModel):
    """Requires `event_name` from `emitter` in the same receipt for a log to count."""

    event_name: str
    emitter: str

    async def check(
        self,
        provider: EvmProvider,
        iface: ContractInterface,
        tx_hash: str,
        receipts: dict[str, dict | None] | None = None,
    ) -> CompanionCheck:
        """`receipts` memoizes receipts by tx hash across calls when given."""
        if receipts is not None and tx_hash in receipts:
            receipt = receipts[tx_hash]
        else:
            receipt = await provider.get_transaction_receipt(tx_hash)
            if receipts is not None:
                receipts[tx_hash] = receipt
        if not receipt:
            return CompanionCheck.UNVERIFIED

        for log in receipt.get("logs", []):
            try:
                parsed = iface.parse_log(log)
            except LogDecodeError:
                continue
            if parsed.address == self.emitter and parsed.name == self.event_name:
                return CompanionCheck.CONFIRMED
        return CompanionCheck.ABSENT

    async def should_exclude(
        self,
        provider: EvmProvider,
        iface: ContractInterface,
        tx_hash: str,
        receipts: dict[str, dict | None] | None = None,
    ) -> bool:
        verdict = await self.check(provider, iface, tx_hash, receipts)
        if verdict == CompanionCheck.UNVERIFIED:
            logger.warning("No receipt for %s on %s, keeping log unverified", tx_hash, provider.name)
        return verdict == CompanionCheck.ABSENT


class EventDescriptor(BaseModel):
    """One logical event kind (deposit or withdrawal) of a bridge on one chain.

    Field maps go canonical EventRow field -> raw key:
        log_keys: keys of the raw log (blockNumber, transactionHash, address)
        arg_keys: decoded event argument names
        tx_keys: keys of the enclosing transaction (from)
    """

    topic: str  # event signature, e.g. "SentTransferRemote(uint32,bytes32,uint256)"
    abi: list[dict]
    is_deposit: bool
    target: str | None = None  # emitting contract; None matches any address
    log_keys: dict[str, str] = {}
    arg_keys: dict[str, str] = {}
    arg_transforms: dict[str, ArgTransform] = {}
    tx_keys: dict[str, str] = {}
    resolve_wrapped_token: bool = False
    companion: CompanionEventFilter | None = None

    @property
    def event_name(self) -> str:
        return self.topic.split("(", 1)[0]

    @property
    def topic_hash(self) -> str:
        return "0x" + keccak(text=self.topic).hex()

    def interface(self) -> ContractInterface:
        return ContractInterface(self.abi)
