"""PostgreSQL implementation of the visit log."""

from datetime import datetime, timedelta
from typing import Callable

import logfire
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from margin.domain.error import VisitLogUnavailableError
from margin.domain.model.visit import Visit
from margin.domain.repository import VisitLog
from margin.persistence.mappers import row_to_visit
from margin.persistence.tables import visits_table
from margin.util.clock import utcnow


class PostgresVisitLog(VisitLog):
    """Visit log stored in the `visits` table.

    Each call runs in its own short transaction; the log is shared by all
    requests, so it holds a session factory rather than a session.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the log.

        Args:
            session_factory: Factory for database sessions
            now: Clock used for expiry
        """
        self.session_factory = session_factory
        self.now = now

    async def put(self, key: str, visit: Visit, ttl: timedelta) -> None:
        """Upsert a visit and drop records past their expiry."""
        now = self.now()
        values = {
            "key": key,
            "payload": visit.model_dump(mode="json"),
            "recorded_at": now,
            "expires_at": now + ttl,
        }
        stmt = insert(visits_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[visits_table.c.key],
            set_={
                "payload": stmt.excluded.payload,
                "recorded_at": stmt.excluded.recorded_at,
                "expires_at": stmt.excluded.expires_at,
            },
        )

        try:
            async with self.session_factory() as session, session.begin():
                await session.execute(
                    delete(visits_table).where(visits_table.c.expires_at <= now)
                )
                await session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Visit log write failed", error=str(e))
            raise VisitLogUnavailableError("Visit log unavailable")

    async def scan(self, prefix: str, limit: int) -> list[Visit]:
        """List unexpired visits under a key prefix, oldest first."""
        stmt = (
            select(visits_table)
            .where(visits_table.c.key.startswith(prefix, autoescape=True))
            .where(visits_table.c.expires_at > self.now())
            .order_by(visits_table.c.recorded_at)
            .limit(limit)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                rows = result.mappings().all()
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Visit log read failed", error=str(e))
            raise VisitLogUnavailableError("Visit log unavailable")

        return [row_to_visit(dict(row)) for row in rows]


class UnboundVisitLog(VisitLog):
    """Stand-in used when no visit log is configured."""

    async def put(self, key: str, visit: Visit, ttl: timedelta) -> None:
        raise VisitLogUnavailableError()

    async def scan(self, prefix: str, limit: int) -> list[Visit]:
        raise VisitLogUnavailableError()
