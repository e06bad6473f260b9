import time
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bridgeagg.db.models.cache_entry import CacheEntry
from bridgeagg.db.session import dialect_insert


class CacheRepo:
    """Key/value store with optional expiry, kept in the same database as the ledger."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> Optional[str]:
        result = await self._session.execute(select(CacheEntry).where(CacheEntry.key == key))
        entry = result.scalar_one_or_none()
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= int(time.time()):
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store value under key. ttl in seconds; None keeps it forever."""
        expires_at = int(time.time()) + ttl if ttl is not None else None
        stmt = dialect_insert(self._session, CacheEntry).values(key=key, value=value, expires_at=expires_at)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={"value": stmt.excluded.value, "expires_at": stmt.excluded.expires_at, "updated_at": func.now()},
        )
        await self._session.execute(stmt)
