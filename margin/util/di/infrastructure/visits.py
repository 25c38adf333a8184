"""Visit log infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from margin.config import Settings
from margin.domain.repository import VisitLog
from margin.persistence.database import create_engine, create_session_factory
from margin.persistence.repository import PostgresVisitLog, UnboundVisitLog
from margin.util.di.base import ProviderBase
from margin.util.observability import instrument_sqlalchemy


class VisitsProvider(ProviderBase):
    """Visit log component base."""

    __mock_component__ = "visits"


class ProdVisitsProvider(VisitsProvider):
    """Production visit log provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_visit_log(self, settings: Settings) -> AsyncIterator[VisitLog]:
        """Provide the visit log, or an unbound one when disabled.

        No engine is created unless the log is enabled.
        """
        if not settings.visits.enabled:
            logfire.info("Visit log disabled")
            yield UnboundVisitLog()
            return

        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        try:
            yield PostgresVisitLog(create_session_factory(engine))
        finally:
            await engine.dispose()
