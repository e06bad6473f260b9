import json
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bridgeagg.db.repos.cache_repo import CacheRepo

logger = logging.getLogger(__name__)


class ProcessedFileCheckpoint:
    """Durable set of fully committed source files, stored as a JSON list in the cache table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], key: str) -> None:
        self._session_factory = session_factory
        self.key = key

    async def load(self) -> set[str]:
        async with self._session_factory() as session:
            raw = await CacheRepo(session).get(self.key)
        return set(json.loads(raw or "[]"))

    async def save(self, processed: set[str]) -> None:
        async with self._session_factory.begin() as session:
            await CacheRepo(session).set(self.key, json.dumps(sorted(processed)), ttl=None)
        logger.debug("Checkpoint %s: %d files", self.key, len(processed))
