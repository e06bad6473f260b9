import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bridgeagg.db.models.transaction import NATURAL_KEY, BridgeTransaction
from bridgeagg.db.session import dialect_insert
from bridgeagg.domain.enums import OnConflict
from bridgeagg.domain.models.bridge import TransactionRow
from bridgeagg.exceptions import RowValidationError

logger = logging.getLogger(__name__)

_UPDATABLE = ("ts", "tx_block", "amount", "is_usd_volume", "txs_counted_as", "origin_chain")

# 13 bound parameters per row; asyncpg caps a statement at 32767
ROWS_PER_STATEMENT = 1000


class TransactionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_rows(
        self,
        rows: list[TransactionRow],
        allow_null_tx_values: bool = True,
        on_conflict: OnConflict = OnConflict.UPSERT,
    ) -> int:
        """Insert canonical rows, ROWS_PER_STATEMENT per statement. Returns the number of distinct rows sent.

        Rows sharing a natural key within the batch collapse to the last one, since a single
        ON CONFLICT DO UPDATE statement may not touch the same row twice.
        """
        if not rows:
            return 0

        deduped: dict[tuple, dict] = {}
        for row in rows:
            if not allow_null_tx_values and row.tx_block is None:
                raise RowValidationError(f"Missing tx_block for {row.chain} tx {row.tx_hash}")
            values = row.model_dump()
            deduped[tuple(values[k] for k in NATURAL_KEY)] = values

        values = list(deduped.values())
        for i in range(0, len(values), ROWS_PER_STATEMENT):
            await self._session.execute(self._insert_stmt(values[i : i + ROWS_PER_STATEMENT], on_conflict))
        logger.debug("Wrote %d transaction rows (%s)", len(values), on_conflict.value)
        return len(values)

    def _insert_stmt(self, values: list[dict], on_conflict: OnConflict):
        stmt = dialect_insert(self._session, BridgeTransaction).values(values)
        if on_conflict == OnConflict.UPSERT:
            set_ = {col: stmt.excluded[col] for col in _UPDATABLE}
            set_["updated_at"] = func.now()
            stmt = stmt.on_conflict_do_update(index_elements=list(NATURAL_KEY), set_=set_)
        elif on_conflict == OnConflict.IGNORE:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(NATURAL_KEY))
        return stmt

    async def count_for_bridge(self, bridge_id: int) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(BridgeTransaction).where(BridgeTransaction.bridge_id == bridge_id)
        )
        return result.scalar_one()

    async def list_for_bridge(
        self,
        bridge_id: int,
        is_deposit: bool | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[BridgeTransaction]:
        stmt = select(BridgeTransaction).where(BridgeTransaction.bridge_id == bridge_id)
        if is_deposit is not None:
            stmt = stmt.where(BridgeTransaction.is_deposit == is_deposit)
        result = await self._session.execute(
            stmt.order_by(BridgeTransaction.ts, BridgeTransaction.id).limit(limit).offset(offset)
        )
        return list(result.scalars().all())
