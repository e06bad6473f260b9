"""Drain pending LayerZero dump files from a local directory into the ledger.

Usage:
    PYTHONPATH=src python scripts/run_layerzero.py [DATA_DIR]

Rerun after a crash: files already in the checkpoint are skipped, a half-done file is replayed.
"""

import asyncio
import logging
import sys
import time

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def main() -> None:
    from bridgeagg.config import settings
    from bridgeagg.db.session import build_engine, build_session_factory
    from bridgeagg.handlers.run_layerzero import handler
    from bridgeagg.ingestion.sources import CsvDirectorySource

    data_dir = sys.argv[1] if len(sys.argv) > 1 else settings.layerzero_data_dir
    engine = build_engine(settings.database_url, echo=False)
    sf = build_session_factory(engine)

    t0 = time.time()
    try:
        stats = await handler(sf, CsvDirectorySource(data_dir), batch_size=settings.ingest_batch_size)
    finally:
        await engine.dispose()
    print(
        f"Done: {stats['files']} files, {stats['transactions']} transactions,"
        f" {stats['rows']} rows  ({time.time() - t0:.1f}s)"
    )


if __name__ == "__main__":
    asyncio.run(main())
