from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bridgeagg.db.models.bridge_config import BridgeConfig
from bridgeagg.db.session import dialect_insert


class BridgeConfigRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_config_entries(self, bridge_name: str, chains: list[str]) -> None:
        """Ensure a config row exists for every chain of an adapter. Safe to call on every run."""
        values = [{"bridge_name": bridge_name, "chain": chain.lower()} for chain in dict.fromkeys(chains)]
        if not values:
            return
        stmt = dialect_insert(self._session, BridgeConfig).values(values)
        stmt = stmt.on_conflict_do_nothing(index_elements=["bridge_name", "chain"])
        await self._session.execute(stmt)

    async def get_bridge_id(self, bridge_name: str, chain: str) -> Optional[BridgeConfig]:
        result = await self._session.execute(
            select(BridgeConfig).where(
                BridgeConfig.bridge_name == bridge_name,
                BridgeConfig.chain == chain.lower(),
            )
        )
        return result.scalar_one_or_none()

    async def list_for_bridge(self, bridge_name: str) -> list[BridgeConfig]:
        result = await self._session.execute(
            select(BridgeConfig).where(BridgeConfig.bridge_name == bridge_name).order_by(BridgeConfig.chain)
        )
        return list(result.scalars().all())
