"""Integration tests for PostgresVisitLog.

Needs a running PostgreSQL reachable through DATABASE__URL.
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio

from margin.config import Settings
from margin.domain.model.visit import Visit
from margin.persistence.database import create_engine, create_session_factory
from margin.persistence.repository import PostgresVisitLog
from margin.persistence.tables import metadata

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="needs a running PostgreSQL"
)

NOW = datetime(2025, 3, 4, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest_asyncio.fixture
async def engine():
    engine = create_engine(Settings())
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def visit_log(engine, clock):
    return PostgresVisitLog(create_session_factory(engine), now=clock)


@pytest.fixture
def prefix():
    # Unique per test so runs do not see each other's rows
    return f"v:test-{uuid4().hex}:"


class TestPostgresVisitLog:
    @pytest.mark.asyncio
    async def test_put_then_scan(self, visit_log, prefix):
        await visit_log.put(f"{prefix}a", Visit(page="/a", ts=NOW), ttl=timedelta(days=90))
        await visit_log.put(f"{prefix}b", Visit(page="/b", ts=NOW), ttl=timedelta(days=90))

        visits = await visit_log.scan(prefix, limit=10)

        assert sorted(v.page for v in visits) == ["/a", "/b"]

    @pytest.mark.asyncio
    async def test_put_same_key_upserts(self, visit_log, prefix):
        await visit_log.put(f"{prefix}a", Visit(page="/old", ts=NOW), ttl=timedelta(days=1))
        await visit_log.put(f"{prefix}a", Visit(page="/new", ts=NOW), ttl=timedelta(days=1))

        visits = await visit_log.scan(prefix, limit=10)

        assert [v.page for v in visits] == ["/new"]

    @pytest.mark.asyncio
    async def test_expired_rows_hidden(self, visit_log, prefix, clock):
        await visit_log.put(f"{prefix}a", Visit(page="/a", ts=NOW), ttl=timedelta(days=1))

        clock.now = NOW + timedelta(days=2)

        assert await visit_log.scan(prefix, limit=10) == []

    @pytest.mark.asyncio
    async def test_prefix_wildcards_escaped(self, visit_log, prefix):
        await visit_log.put(f"{prefix}a", Visit(page="/a", ts=NOW), ttl=timedelta(days=1))

        assert await visit_log.scan(prefix.replace("test", "t_st"), limit=10) == []
