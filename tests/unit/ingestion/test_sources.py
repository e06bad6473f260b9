"""Tests for CsvDirectorySource."""

import asyncio
import logging

import pytest

from bridgeagg.ingestion import sources
from bridgeagg.ingestion.sources import CsvDirectorySource

HEADER = "timestampSource,txHashSource,txHashDestination,chainSource,chainDestination,token,usdAmount,eoaAddressFrom,eoaAddressTo\n"
ROW = "2024-01-01T00:00:00Z,0xs{n},0xd{n},ethereum,arbitrum,0xtoken,{amount},0xalice,0xbob\n"


def _write(path, amounts):
    path.write_text(HEADER + "".join(ROW.format(n=i, amount=a) for i, a in enumerate(amounts)))


async def _collect(source, processed):
    return [batch async for batch in source.iter_batches(processed)]


@pytest.fixture()
def data_dir(tmp_path):
    _write(tmp_path / "b.csv", ["10", "20"])
    _write(tmp_path / "a.csv", ["1"])
    (tmp_path / "notes.txt").write_text("ignored")
    return tmp_path


class TestCsvDirectorySource:
    async def test_files_in_name_order(self, data_dir):
        batches = await _collect(CsvDirectorySource(data_dir), set())

        assert [b.file_name for b in batches] == ["a.csv", "b.csv"]
        assert len(batches[1].transactions) == 2
        assert batches[1].transactions[0].tx_hash_source == "0xs0"

    async def test_processed_files_skipped(self, data_dir):
        batches = await _collect(CsvDirectorySource(data_dir), {"a.csv"})
        assert [b.file_name for b in batches] == ["b.csv"]

    async def test_malformed_rows_skipped(self, tmp_path, caplog):
        _write(tmp_path / "c.csv", ["5", "not-a-number", "-3", "7"])

        with caplog.at_level(logging.WARNING):
            batches = await _collect(CsvDirectorySource(tmp_path), set())

        assert [str(tx.usd_amount) for tx in batches[0].transactions] == ["5", "7"]
        assert "skipped 2 malformed rows" in caplog.text

    async def test_empty_directory(self, tmp_path):
        assert await _collect(CsvDirectorySource(tmp_path), set()) == []

    async def test_files_are_read_off_the_event_loop(self, data_dir, monkeypatch):
        calls = []
        real_to_thread = asyncio.to_thread

        async def spy(func, *args, **kwargs):
            calls.append(args[0].name)
            return await real_to_thread(func, *args, **kwargs)

        monkeypatch.setattr(sources.asyncio, "to_thread", spy)

        batches = await _collect(CsvDirectorySource(data_dir), set())

        assert calls == ["a.csv", "b.csv"]
        assert len(batches) == 2
