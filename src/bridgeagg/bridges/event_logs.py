"""Descriptor-driven log fetching: eth_getLogs per descriptor, decode, filter, map to EventRow."""

import logging
from typing import Any

from bridgeagg.bridges.descriptors import ARG_TRANSFORMS, EventDescriptor
from bridgeagg.domain.models.bridge import EventRow
from bridgeagg.exceptions import ConfigurationError
from bridgeagg.infra.blockchain.abi import ContractInterface, LogDecodeError
from bridgeagg.infra.blockchain.evm.provider import EvmProvider
from bridgeagg.infra.blockchain.evm.provider_registry import ProviderRegistry
from bridgeagg.infra.blockchain.evm.token_resolver import TokenResolver

logger = logging.getLogger(__name__)


def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    value = str(value)
    return value if value.startswith("0x") else "0x" + value


class EventLogFetcher:
    def __init__(self, providers: ProviderRegistry, token_resolver: TokenResolver) -> None:
        self._providers = providers
        self._tokens = token_resolver

    async def get_event_rows(
        self,
        bridge_name: str,
        chain_key: str,
        from_block: int,
        to_block: int,
        descriptors: list[EventDescriptor],
    ) -> list[EventRow]:
        provider = self._providers.get_provider(chain_key)
        if provider is None:
            raise ConfigurationError(f"No RPC provider for chain {chain_key}")

        rows: list[EventRow] = []
        txs: dict[str, dict | None] = {}
        receipts: dict[str, dict | None] = {}
        block_times: dict[int, int] = {}

        for descriptor in descriptors:
            iface = descriptor.interface()
            logs = await provider.get_logs(from_block, to_block, [descriptor.topic_hash], address=descriptor.target)
            kept = 0
            for log in logs:
                tx_hash = _hex(log["transactionHash"])
                if descriptor.companion is not None and await descriptor.companion.should_exclude(
                    provider, iface, tx_hash, receipts
                ):
                    continue
                try:
                    decoded = iface.parse_log(log)
                except LogDecodeError as e:
                    logger.warning("Skipping undecodable %s log in %s: %s", descriptor.event_name, tx_hash, e)
                    continue

                row = await self._build_row(provider, iface, descriptor, log, decoded.args, txs, block_times)
                if row is not None:
                    rows.append(row)
                    kept += 1

            logger.info(
                "%s %s %s: %d/%d logs kept in blocks [%d, %d]",
                bridge_name, chain_key, descriptor.event_name, kept, len(logs), from_block, to_block,
            )

        return rows

    async def _build_row(
        self,
        provider: EvmProvider,
        iface: ContractInterface,
        descriptor: EventDescriptor,
        log: dict,
        args: dict,
        txs: dict[str, dict | None],
        block_times: dict[int, int],
    ) -> EventRow | None:
        values: dict[str, Any] = {}
        for field, key in descriptor.log_keys.items():
            values[field] = log[key]
        for field, key in descriptor.arg_keys.items():
            values[field] = args[key]
        for field, transform in descriptor.arg_transforms.items():
            values[field] = ARG_TRANSFORMS[transform](values[field])

        tx_hash = _hex(log["transactionHash"])
        if descriptor.tx_keys:
            if tx_hash not in txs:
                txs[tx_hash] = await provider.get_transaction(tx_hash)
            tx = txs[tx_hash]
            if tx is None:
                logger.warning("Transaction %s not found on %s, skipping log", tx_hash, provider.name)
                return None
            for field, key in descriptor.tx_keys.items():
                values[field] = tx[key]

        if descriptor.resolve_wrapped_token:
            values["token"] = await self._tokens.resolve(provider, iface, values["token"])

        block_number = int(log["blockNumber"])
        if block_number not in block_times:
            block_times[block_number] = await provider.get_block_timestamp(block_number) * 1000

        values["tx_hash"] = _hex(values.get("tx_hash", tx_hash))
        values.setdefault("block_number", block_number)
        return EventRow(**values, timestamp=block_times[block_number], is_deposit=descriptor.is_deposit)
