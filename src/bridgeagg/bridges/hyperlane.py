"""Hyperlane warp route adapter.

Deposits are SentTransferRemote logs confirmed by a Mailbox Dispatch in the same transaction;
withdrawals are ReceivedTransferRemote logs confirmed by a Mailbox Process. Warp route contracts
emit the transfer events, so logs are matched by topic on any address and the token is resolved
from the route contract via wrappedToken().
"""

import logging

from eth_utils import to_checksum_address

from bridgeagg.bridges.chain_registry import ChainRegistryResolver, is_mainnet_evm
from bridgeagg.bridges.descriptors import CompanionEventFilter, EventDescriptor
from bridgeagg.bridges.event_logs import EventLogFetcher
from bridgeagg.domain.enums import ArgTransform
from bridgeagg.domain.models.bridge import ChainTable, EventRow, FetchFn
from bridgeagg.exceptions import ConfigurationError
from bridgeagg.infra.blockchain.abi import event_abi, view_function_abi
from bridgeagg.infra.blockchain.evm.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)

BRIDGE_NAME = "hyperlane"

# Registry chains with no provider entry yet
EXCLUDED_CHAINS = {"cheesechain", "lumia"}

WRAPPED_TOKEN_ABI = view_function_abi("wrappedToken", outputs=["address"])

DEPOSIT_ABI = [
    event_abi(
        "SentTransferRemote",
        ("uint32", "destination", True),
        ("bytes32", "recipient", True),
        ("uint256", "amount", False),
    ),
    event_abi(
        "Dispatch",
        ("address", "sender", True),
        ("uint32", "destination", True),
        ("bytes32", "recipient", True),
        ("bytes", "message", False),
    ),
    WRAPPED_TOKEN_ABI,
]

WITHDRAW_ABI = [
    event_abi(
        "ReceivedTransferRemote",
        ("uint32", "origin", True),
        ("bytes32", "recipient", True),
        ("uint256", "amount", False),
    ),
    event_abi(
        "Process",
        ("uint32", "origin", True),
        ("bytes32", "sender", True),
        ("address", "recipient", True),
    ),
    WRAPPED_TOKEN_ABI,
]

_COMMON_KEYS = dict(
    target=None,
    log_keys={"block_number": "blockNumber", "tx_hash": "transactionHash", "token": "address"},
    arg_keys={"to_address": "recipient", "amount": "amount"},
    arg_transforms={"to_address": ArgTransform.BYTES32_TO_ADDRESS},
    tx_keys={"from_address": "from"},
    resolve_wrapped_token=True,
)


def build_descriptors(chain: str, address_book: dict[str, dict[str, str]]) -> list[EventDescriptor]:
    """Deposit and withdrawal descriptors for one chain's Mailbox."""
    mailbox = address_book.get(chain, {}).get("mailbox")
    if not mailbox:
        raise ConfigurationError(f"No mailbox address for {chain}")
    mailbox = to_checksum_address(mailbox)

    deposit = EventDescriptor(
        topic="SentTransferRemote(uint32,bytes32,uint256)",
        abi=DEPOSIT_ABI,
        is_deposit=True,
        companion=CompanionEventFilter(event_name="Dispatch", emitter=mailbox),
        **_COMMON_KEYS,
    )
    withdraw = EventDescriptor(
        topic="ReceivedTransferRemote(uint32,bytes32,uint256)",
        abi=WITHDRAW_ABI,
        is_deposit=False,
        companion=CompanionEventFilter(event_name="Process", emitter=mailbox),
        **_COMMON_KEYS,
    )
    return [deposit, withdraw]


def _make_fetch(fetcher: EventLogFetcher, chain_key: str, descriptors: list[EventDescriptor]) -> FetchFn:
    async def fetch(from_block: int, to_block: int) -> list[EventRow]:
        return await fetcher.get_event_rows(BRIDGE_NAME, chain_key, from_block, to_block, descriptors)

    return fetch


def build_adapter(table: ChainTable, providers: ProviderRegistry, fetcher: EventLogFetcher) -> dict[str, FetchFn]:
    """One fetch function per usable chain, keyed by the provider's chain name."""
    adapter: dict[str, FetchFn] = {}
    for key, chain in table.chains.items():
        if not is_mainnet_evm(chain):
            continue
        if key not in table.addresses or key in EXCLUDED_CHAINS:
            continue

        adapter_key = table.provider_key(key)
        if providers.get_provider(adapter_key) is None:
            logger.info("Hyperlane: no provider for %s, skipping", key)
            continue

        try:
            descriptors = build_descriptors(key, table.addresses)
        except ConfigurationError as e:
            logger.info("Hyperlane: %s", e)
            continue
        adapter[adapter_key] = _make_fetch(fetcher, adapter_key, descriptors)

    logger.info("Hyperlane adapter built for %d chains", len(adapter))
    return adapter


async def build(resolver: ChainRegistryResolver, providers: ProviderRegistry, fetcher: EventLogFetcher) -> dict[str, FetchFn]:
    table = await resolver.resolve()
    return build_adapter(table, providers, fetcher)
