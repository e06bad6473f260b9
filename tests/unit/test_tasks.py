"""Async task bodies with container overrides."""

from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers

from bridgeagg.bridges import hyperlane
from bridgeagg.config import Settings
from bridgeagg.container import Container
from bridgeagg.domain.models.bridge import EventRow
from bridgeagg.workers.tasks import _ingest_layerzero_async, _run_hyperlane_async

HEADER = "timestampSource,txHashSource,txHashDestination,chainSource,chainDestination,token,usdAmount,eoaAddressFrom,eoaAddressTo\n"


@pytest.fixture()
def container(file_engine, session_factory):
    c = Container()
    c.settings.override(providers.Object(Settings(ingest_batch_size=10)))
    c.engine.override(providers.Object(file_engine))
    c.session_factory.override(providers.Object(session_factory))
    return c


class TestIngestLayerzeroTask:
    async def test_ok(self, container, tmp_path):
        data_dir = tmp_path / "lz"
        data_dir.mkdir()
        (data_dir / "001.csv").write_text(
            HEADER + "2024-01-01T00:00:00Z,0xs,0xd,ethereum,optimism,0xtoken,12,0xa,0xb\n"
        )

        result = await _ingest_layerzero_async(str(data_dir), container=container)

        assert result == {"status": "ok", "files": 1, "transactions": 1, "rows": 2}

    async def test_error_is_reported(self, container, tmp_path, monkeypatch):
        from bridgeagg.ingestion.pipeline import ResumableIngestionPipeline

        monkeypatch.setattr(ResumableIngestionPipeline, "run", AsyncMock(side_effect=RuntimeError("db gone")))

        result = await _ingest_layerzero_async(str(tmp_path), container=container)

        assert result == {"status": "error", "message": "db gone"}


class TestRunHyperlaneTask:
    async def test_stores_chain_rows(self, container, monkeypatch):
        row = EventRow(
            block_number=5, tx_hash="0x01", timestamp=1000, from_address="0xa", to_address="0xb",
            token="0xc", amount=1, is_deposit=True,
        )

        async def fetch(from_block, to_block):
            return [row]

        monkeypatch.setattr(hyperlane, "build", AsyncMock(return_value={"ethereum": fetch, "base": fetch}))

        result = await _run_hyperlane_async("ethereum", 1, 10, container=container)

        assert result == {"status": "ok", "chains": {"ethereum": 1}, "errors": {}}

    async def test_unknown_chain(self, container, monkeypatch):
        monkeypatch.setattr(hyperlane, "build", AsyncMock(return_value={}))

        result = await _run_hyperlane_async("nowhere", 1, 10, container=container)

        assert result["status"] == "error"
        assert "nowhere" in result["message"]
