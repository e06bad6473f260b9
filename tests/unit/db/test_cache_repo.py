import time

from bridgeagg.db.repos.cache_repo import CacheRepo
from bridgeagg.ingestion.checkpoint import ProcessedFileCheckpoint


class TestCacheRepo:
    async def test_missing_key(self, session):
        assert await CacheRepo(session).get("nope") is None

    async def test_set_and_get(self, session):
        repo = CacheRepo(session)
        await repo.set("k", "v")
        assert await repo.get("k") == "v"

    async def test_overwrite(self, session):
        repo = CacheRepo(session)
        await repo.set("k", "first")
        await repo.set("k", "second")
        session.expire_all()
        assert await repo.get("k") == "second"

    async def test_expired_entry_is_missing(self, session, monkeypatch):
        repo = CacheRepo(session)
        await repo.set("k", "v", ttl=60)
        assert await repo.get("k") == "v"

        now = time.time()
        monkeypatch.setattr(time, "time", lambda: now + 61)
        session.expire_all()
        assert await repo.get("k") is None


class TestProcessedFileCheckpoint:
    async def test_empty_by_default(self, session_factory):
        assert await ProcessedFileCheckpoint(session_factory, "files").load() == set()

    async def test_round_trip(self, session_factory):
        checkpoint = ProcessedFileCheckpoint(session_factory, "files")
        await checkpoint.save({"b.csv", "a.csv"})
        await checkpoint.save({"b.csv", "a.csv", "c.csv"})

        assert await ProcessedFileCheckpoint(session_factory, "files").load() == {"a.csv", "b.csv", "c.csv"}

    async def test_keys_are_independent(self, session_factory):
        await ProcessedFileCheckpoint(session_factory, "one").save({"a.csv"})
        assert await ProcessedFileCheckpoint(session_factory, "two").load() == set()
