"""Entry point: drain LayerZero transaction dumps into the ledger."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bridgeagg.bridges.layerzero import BRIDGE_NAME, LAYERZERO_CHAINS, PROCESSED_FILES_KEY
from bridgeagg.ingestion.checkpoint import ProcessedFileCheckpoint
from bridgeagg.ingestion.pipeline import BATCH_SIZE, ResumableIngestionPipeline
from bridgeagg.ingestion.sources import TransactionSource

logger = logging.getLogger(__name__)


async def handler(
    session_factory: async_sessionmaker[AsyncSession],
    source: TransactionSource,
    batch_size: int = BATCH_SIZE,
) -> dict:
    pipeline = ResumableIngestionPipeline(
        session_factory,
        bridge_name=BRIDGE_NAME,
        chains=LAYERZERO_CHAINS,
        batch_size=batch_size,
    )
    checkpoint = ProcessedFileCheckpoint(session_factory, PROCESSED_FILES_KEY)
    stats = await pipeline.run(source, checkpoint)
    logger.info(
        "LayerZero run done: %d files, %d transactions, %d rows",
        stats["files"], stats["transactions"], stats["rows"],
    )
    return stats
