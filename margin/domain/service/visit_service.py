"""Visit logging domain service."""

import hashlib
import secrets
from datetime import date, datetime, timedelta
from typing import Callable
from uuid import uuid4

import logfire

from margin.config import VisitSettings
from margin.domain.error import NotAuthorizedError, ValidationError
from margin.domain.model.visit import Visit, VisitDay
from margin.domain.repository import VisitLog
from margin.util.clock import utcnow

from .base import Service


def day_prefix(day: date) -> str:
    """Key prefix of one calendar day's bucket."""
    return f"v:{day.isoformat()}:"


class VisitService(Service):
    """Domain service for the page-view log."""

    def __init__(
        self,
        visit_log: VisitLog,
        settings: VisitSettings,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize visit service.

        Args:
            visit_log: Key-value visit log
            settings: Visit logger settings (token, retention, limits)
            now: Server clock
        """
        self.visit_log = visit_log
        self.settings = settings
        self.now = now

    async def record_visit(
        self,
        page: str,
        ip: str,
        country: str = "",
        city: str = "",
        region: str = "",
        ua: str = "",
        visit_key: str | None = None,
    ) -> Visit:
        """Record one page view.

        A visit_key makes the write idempotent within a day: the same key
        lands on the same record.

        Raises:
            VisitLogUnavailableError: If the log is unbound or unreachable
        """
        ts = self.now()
        visit = Visit(
            ip=ip, country=country, city=city, region=region, page=page, ua=ua, ts=ts
        )

        if visit_key:
            suffix = hashlib.sha256(visit_key.encode("utf-8")).hexdigest()[:32]
        else:
            suffix = uuid4().hex
        key = f"{day_prefix(ts.date())}{suffix}"

        await self.visit_log.put(
            key, visit, ttl=timedelta(days=self.settings.retention_days)
        )
        logfire.debug("Visit recorded", page=page, country=country)
        return visit

    def authorize(self, token: str | None) -> None:
        """Check the pre-shared admin token.

        Raises:
            NotAuthorizedError: If no token is configured or it does not match
        """
        expected = self.settings.admin_token
        if not token or not expected:
            raise NotAuthorizedError("visits")
        if not secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
            logfire.warn("Visit log read with a wrong token")
            raise NotAuthorizedError("visits")

    def clamp_days(self, days: int | None) -> int:
        """Clamp a requested look-back to 1..max_query_days (default 1)."""
        if not days or days < 1:
            return 1
        return min(days, self.settings.max_query_days)

    async def get_visits(
        self, end: date | None = None, days: int | None = None
    ) -> dict[str, VisitDay]:
        """Aggregate visits per day, newest day first.

        Args:
            end: Newest day to include (defaults to today, UTC)
            days: Number of days to look back

        Returns:
            Mapping of ISO date to that day's count and records

        Raises:
            ValidationError: If the range starts before the first calendar day
            VisitLogUnavailableError: If the log is unbound or unreachable
        """
        end = end or self.now().date()
        days = self.clamp_days(days)
        if end.toordinal() - date.min.toordinal() < days - 1:
            raise ValidationError("date out of range")

        with logfire.span("visit_service.get_visits", end=end.isoformat(), days=days):
            result: dict[str, VisitDay] = {}
            for offset in range(days):
                day = end - timedelta(days=offset)
                visits = await self.visit_log.scan(
                    day_prefix(day), limit=self.settings.max_per_day
                )
                result[day.isoformat()] = VisitDay(count=len(visits), visits=visits)
            return result
