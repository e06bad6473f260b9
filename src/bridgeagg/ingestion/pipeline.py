"""Resumable ingestion of external transaction dumps into the ledger.

Each chunk of a file commits in its own transaction; a file enters the checkpoint only after all
of its chunks committed. A crash mid-file therefore replays the whole file on the next run, and
the upsert on the rows' natural key keeps that replay from duplicating anything.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bridgeagg.db.repos.bridge_config_repo import BridgeConfigRepo
from bridgeagg.db.repos.transaction_repo import TransactionRepo
from bridgeagg.domain.enums import OnConflict
from bridgeagg.domain.models.bridge import ExternalTransaction, FileBatch, TransactionRow
from bridgeagg.ingestion.checkpoint import ProcessedFileCheckpoint
from bridgeagg.ingestion.rows import split_transaction
from bridgeagg.ingestion.sources import TransactionSource

logger = logging.getLogger(__name__)

BATCH_SIZE = 250


class ResumableIngestionPipeline:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        bridge_name: str,
        chains: list[str],
        batch_size: int = BATCH_SIZE,
    ) -> None:
        self._session_factory = session_factory
        self._bridge_name = bridge_name
        self._chains = chains
        self._batch_size = batch_size

    async def run(self, source: TransactionSource, checkpoint: ProcessedFileCheckpoint) -> dict:
        """Drain `source` into the store. Returns {"files", "transactions", "rows"} counts."""
        stats = {"files": 0, "transactions": 0, "rows": 0}
        try:
            processed = await checkpoint.load()
            bridge_ids = await self._resolve_bridge_ids()
            logger.info("%s bridge ids: %s", self._bridge_name, bridge_ids)
            logger.info("Previously processed files: %d", len(processed))

            async for batch in source.iter_batches(processed):
                stats["rows"] += await self._process_file(batch, bridge_ids)
                stats["transactions"] += len(batch.transactions)
                stats["files"] += 1

                processed.add(batch.file_name)
                await checkpoint.save(processed)
                logger.info("Completed processing file: %s", batch.file_name)
        except Exception:
            logger.exception("Error processing %s transactions", self._bridge_name)
            raise

        return stats

    async def _resolve_bridge_ids(self) -> dict[str, int]:
        """Seed config rows, then map lowercased chain -> bridge id. Unresolvable chains are dropped."""
        async with self._session_factory.begin() as session:
            repo = BridgeConfigRepo(session)
            await repo.insert_config_entries(self._bridge_name, self._chains)

            bridge_ids: dict[str, int] = {}
            for chain in self._chains:
                chain = chain.lower()
                config = await repo.get_bridge_id(self._bridge_name, chain)
                if config is None:
                    logger.warning("No bridge id for %s on %s, its rows will be skipped", self._bridge_name, chain)
                    continue
                bridge_ids[chain] = config.id
        return bridge_ids

    async def _process_file(self, batch: FileBatch, bridge_ids: dict[str, int]) -> int:
        transactions = batch.transactions
        total = len(transactions)
        processed_count = 0
        rows_written = 0

        for i in range(0, total, self._batch_size):
            chunk = transactions[i : i + self._batch_size]
            rows_written += await self._commit_chunk(chunk, bridge_ids, batch.file_name)

            processed_count += len(chunk)
            logger.info(
                "Progress: %.2f%% - Inserted %d/%d transactions from %s",
                processed_count / total * 100, processed_count, total, batch.file_name,
            )
        return rows_written

    async def _commit_chunk(
        self,
        chunk: list[ExternalTransaction],
        bridge_ids: dict[str, int],
        file_name: str,
    ) -> int:
        """Upsert one chunk atomically: source rows, then destination rows, one transaction."""
        source_rows: list[TransactionRow] = []
        destination_rows: list[TransactionRow] = []
        for tx in chunk:
            source_row, destination_row = split_transaction(tx, bridge_ids)
            if source_row is not None:
                source_rows.append(source_row)
            if destination_row is not None:
                destination_rows.append(destination_row)

        async with self._session_factory.begin() as session:
            repo = TransactionRepo(session)
            try:
                written = 0
                if source_rows:
                    written += await repo.insert_rows(source_rows, allow_null_tx_values=True, on_conflict=OnConflict.UPSERT)
                if destination_rows:
                    written += await repo.insert_rows(
                        destination_rows, allow_null_tx_values=True, on_conflict=OnConflict.UPSERT
                    )
            except Exception:
                logger.exception("Error inserting %s batch from %s", self._bridge_name, file_name)
                raise
        return written
