"""Celery tasks for bridge ingestion runs."""

import asyncio
import logging

from bridgeagg.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="ingest_layerzero", max_retries=2, default_retry_delay=60)
def ingest_layerzero_task(self, data_dir: str | None = None) -> dict:
    """Drain pending LayerZero dump files.

    Bridges to async code via asyncio.run(); each invocation builds its own container
    (engine, session factory, caches) so no state leaks between runs.
    """
    return asyncio.run(_ingest_layerzero_async(data_dir))


@celery_app.task(bind=True, name="run_hyperlane", max_retries=2, default_retry_delay=60)
def run_hyperlane_task(self, chain: str, from_block: int, to_block: int) -> dict:
    """Fetch and store Hyperlane transfers for one chain and block range."""
    return asyncio.run(_run_hyperlane_async(chain, from_block, to_block))


async def _ingest_layerzero_async(data_dir: str | None = None, container=None) -> dict:
    from bridgeagg.container import Container
    from bridgeagg.handlers.run_layerzero import handler
    from bridgeagg.ingestion.sources import CsvDirectorySource

    container = container or Container()
    settings = container.settings()
    engine = container.engine()

    try:
        source = CsvDirectorySource(data_dir or settings.layerzero_data_dir)
        stats = await handler(container.session_factory(), source, batch_size=settings.ingest_batch_size)
        return {"status": "ok", **stats}
    except Exception as e:
        logger.exception("LayerZero ingestion failed")
        return {"status": "error", "message": str(e)}
    finally:
        await engine.dispose()


async def _run_hyperlane_async(chain: str, from_block: int, to_block: int, container=None) -> dict:
    from bridgeagg.bridges import hyperlane
    from bridgeagg.bridges.chain_registry import ChainRegistryResolver
    from bridgeagg.container import Container
    from bridgeagg.handlers.run_adapter import run_adapter
    from bridgeagg.infra.http.rate_limited_client import RateLimitedClient

    container = container or Container()
    settings = container.settings()
    engine = container.engine()
    providers = container.provider_registry()

    try:
        async with RateLimitedClient(rate_per_second=settings.http_rate_per_second) as http_client:
            resolver = ChainRegistryResolver(http_client, providers, base_uri=settings.hyperlane_registry_uri)
            adapter = await hyperlane.build(resolver, providers, container.event_fetcher())

        if chain not in adapter:
            return {"status": "error", "message": f"Hyperlane has no usable chain {chain}"}

        result = await run_adapter(
            container.session_factory(), hyperlane.BRIDGE_NAME, adapter, from_block, to_block, chains=[chain]
        )
        status = "error" if result["errors"] else "ok"
        return {"status": status, **result}
    except Exception as e:
        logger.exception("Hyperlane run failed for %s", chain)
        return {"status": "error", "message": str(e)}
    finally:
        await engine.dispose()
