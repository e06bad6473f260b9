"""Tests for the Hyperlane adapter builder."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bridgeagg.bridges import hyperlane
from bridgeagg.domain.models.bridge import ChainDescriptor, ChainTable, EventRow
from bridgeagg.infra.blockchain.evm.provider_registry import ProviderRegistry

MAILBOX = "0xc005dc82818d67AF737725bD4bf75435d065D239"


def _chain(name: str, chain_id: int) -> ChainDescriptor:
    return ChainDescriptor(name=name, chain_id=chain_id, protocol="ethereum")


@pytest.fixture()
def providers():
    registry = ProviderRegistry()
    registry.set_provider("avalanche", registry.get_provider("avax"))
    return registry


@pytest.fixture()
def table():
    return ChainTable(
        chains={
            "ethereum": _chain("ethereum", 1),
            "avalanche": _chain("avalanche", 43114),
            "cheesechain": _chain("cheesechain", 383353),
            "unknownchain": _chain("unknownchain", 777777),
            "nomailbox": _chain("nomailbox", 1),
            "noaddresses": _chain("noaddresses", 10),
        },
        addresses={
            "ethereum": {"mailbox": MAILBOX},
            "avalanche": {"mailbox": MAILBOX},
            "cheesechain": {"mailbox": MAILBOX},
            "unknownchain": {"mailbox": MAILBOX},
            "nomailbox": {"interchainGasPaymaster": MAILBOX},
        },
        aliases={"avalanche": "avax"},
    )


@pytest.fixture()
def fetcher():
    mock = MagicMock()
    mock.get_event_rows = AsyncMock(return_value=[])
    return mock


class TestBuildAdapter:
    def test_usable_chains_only(self, table, providers, fetcher):
        adapter = hyperlane.build_adapter(table, providers, fetcher)
        assert set(adapter) == {"ethereum", "avax"}

    def test_testnet_chains_skipped(self, table, providers, fetcher):
        table.chains["sepolia"] = ChainDescriptor(name="sepolia", chain_id=1, protocol="ethereum", is_testnet=True)
        table.addresses["sepolia"] = {"mailbox": MAILBOX}
        adapter = hyperlane.build_adapter(table, providers, fetcher)
        assert "sepolia" not in adapter

    async def test_fetch_delegates_to_fetcher(self, table, providers, fetcher):
        row = EventRow(
            block_number=10, tx_hash="0xaa", timestamp=1000, from_address="0x1", to_address="0x2",
            token="0x3", amount=5, is_deposit=True,
        )
        fetcher.get_event_rows = AsyncMock(return_value=[row])
        adapter = hyperlane.build_adapter(table, providers, fetcher)

        rows = await adapter["avax"](100, 200)

        assert rows == [row]
        args = fetcher.get_event_rows.call_args[0]
        assert args[:4] == ("hyperlane", "avax", 100, 200)
        assert [d.event_name for d in args[4]] == ["SentTransferRemote", "ReceivedTransferRemote"]

    async def test_build_resolves_registry_first(self, table, providers, fetcher):
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=table)

        adapter = await hyperlane.build(resolver, providers, fetcher)

        resolver.resolve.assert_awaited_once()
        assert set(adapter) == {"ethereum", "avax"}
