"""Entry point: run an event adapter's per-chain fetch functions over a block range and store rows."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bridgeagg.db.repos.bridge_config_repo import BridgeConfigRepo
from bridgeagg.db.repos.transaction_repo import TransactionRepo
from bridgeagg.domain.models.bridge import EventRow, FetchFn, TransactionRow

logger = logging.getLogger(__name__)


def to_transaction_row(row: EventRow, bridge_id: int, chain: str) -> TransactionRow:
    return TransactionRow(
        bridge_id=bridge_id,
        chain=chain,
        tx_hash=row.tx_hash,
        ts=row.timestamp or 0,
        tx_block=row.block_number,
        tx_from=row.from_address,
        tx_to=row.to_address,
        token=row.token,
        amount=row.amount,
        is_deposit=row.is_deposit,
        is_usd_volume=False,
        txs_counted_as=None,
        origin_chain=None,
    )


async def run_adapter(
    session_factory: async_sessionmaker[AsyncSession],
    bridge_name: str,
    adapter: dict[str, FetchFn],
    from_block: int,
    to_block: int,
    chains: list[str] | None = None,
) -> dict:
    """Fetch and upsert every chain of `adapter` (or only `chains`). A failing chain does not stop the others.

    Returns {"chains": {chain: rows_written}, "errors": {chain: message}}.
    """
    if chains is not None:
        adapter = {k: v for k, v in adapter.items() if k in chains}

    async with session_factory.begin() as session:
        await BridgeConfigRepo(session).insert_config_entries(bridge_name, list(adapter))

    written: dict[str, int] = {}
    errors: dict[str, str] = {}
    for chain, fetch in adapter.items():
        chain = chain.lower()
        try:
            events = await fetch(from_block, to_block)
            async with session_factory.begin() as session:
                config = await BridgeConfigRepo(session).get_bridge_id(bridge_name, chain)
                if config is None:
                    logger.warning("No bridge id for %s on %s, skipping %d rows", bridge_name, chain, len(events))
                    continue
                rows = [to_transaction_row(e, config.id, chain) for e in events]
                written[chain] = await TransactionRepo(session).insert_rows(rows, allow_null_tx_values=False)
            logger.info("%s %s: stored %d rows for blocks [%d, %d]", bridge_name, chain, written[chain], from_block, to_block)
        except Exception as e:
            logger.exception("Failed to run %s adapter on %s", bridge_name, chain)
            errors[chain] = str(e)

    return {"chains": written, "errors": errors}
