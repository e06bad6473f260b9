"""Tests for shared domain types."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from bridgeagg.db.models.transaction import ZERO_ADDRESS
from bridgeagg.domain.models.bridge import (
    ChainDescriptor,
    ChainTable,
    EventRow,
    TransactionRow,
    normalize_amount,
    to_epoch_ms,
)


class TestToEpochMs:
    def test_utc(self):
        assert to_epoch_ms(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1704067200000

    def test_offset_is_respected(self):
        tz = timezone(timedelta(hours=2))
        assert to_epoch_ms(datetime(2024, 1, 1, 2, 0, tzinfo=tz)) == 1704067200000

    def test_millisecond_precision(self):
        assert to_epoch_ms(datetime(2024, 1, 1, 0, 0, 0, 123456)) == 1704067200123


class TestNormalizeAmount:
    def test_plain_string(self):
        assert normalize_amount(10**30) == "1000000000000000000000000000000"
        assert normalize_amount("1E+3") == "1000"
        assert normalize_amount("0.25") == "0.25"

    @pytest.mark.parametrize("value", ["-1", "nan", "Infinity", "abc"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            normalize_amount(value)


class TestTransactionRow:
    def test_defaults(self):
        row = TransactionRow(bridge_id=1, chain="ethereum", tx_hash="0x1", ts=0, amount=1, is_deposit=True)
        assert row.tx_from == "0x"
        assert row.tx_to == "0x"
        assert row.token == ZERO_ADDRESS
        assert row.tx_block is None
        assert row.amount == "1"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            TransactionRow(bridge_id=1, chain="ethereum", tx_hash="0x1", ts=0, amount=-5, is_deposit=True)


class TestEventRow:
    def test_amount_from_int(self):
        row = EventRow(
            block_number=1, tx_hash="0x1", from_address="0xa", to_address="0xb",
            token="0xc", amount=123, is_deposit=False,
        )
        assert row.amount == "123"
        assert row.timestamp is None


class TestChainDescriptor:
    def test_registry_aliases(self):
        chain = ChainDescriptor.model_validate(
            {"name": "base", "chainId": 8453, "protocol": "ethereum", "isTestnet": False, "rpcUrls": []}
        )
        assert chain.chain_id == 8453
        assert chain.is_testnet is False

    def test_testnet_defaults_false(self):
        assert ChainDescriptor.model_validate({"name": "x", "chainId": "x-1", "protocol": "cosmos"}).is_testnet is False

    def test_provider_key(self):
        table = ChainTable(aliases={"avalanche": "avax"})
        assert table.provider_key("avalanche") == "avax"
        assert table.provider_key("base") == "base"
