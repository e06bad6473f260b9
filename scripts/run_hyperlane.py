"""Fetch Hyperlane warp route transfers for one chain and block range and store them.

Usage:
    PYTHONPATH=src python scripts/run_hyperlane.py CHAIN FROM_BLOCK TO_BLOCK
    PYTHONPATH=src python scripts/run_hyperlane.py --list
"""

import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def list_chains() -> None:
    from bridgeagg.bridges import hyperlane
    from bridgeagg.bridges.chain_registry import ChainRegistryResolver
    from bridgeagg.container import Container
    from bridgeagg.infra.http.rate_limited_client import RateLimitedClient

    container = Container()
    providers = container.provider_registry()
    async with RateLimitedClient(rate_per_second=2.0) as http:
        resolver = ChainRegistryResolver(http, providers)
        adapter = await hyperlane.build(resolver, providers, container.event_fetcher())

    print(f"Hyperlane chains with a provider: {len(adapter)}")
    for chain in sorted(adapter):
        print(f"  {chain}")


async def main() -> None:
    from bridgeagg.workers.tasks import _run_hyperlane_async

    chain, from_block, to_block = sys.argv[1], int(sys.argv[2]), int(sys.argv[3])
    result = await _run_hyperlane_async(chain, from_block, to_block)
    print(result)


if __name__ == "__main__":
    if len(sys.argv) == 2 and sys.argv[1] == "--list":
        asyncio.run(list_chains())
    else:
        asyncio.run(main())
