"""In-memory visit log for testing."""

from datetime import datetime, timedelta
from typing import Callable

from margin.domain.model.visit import Visit
from margin.domain.repository.visit import VisitLog
from margin.util.clock import utcnow


class InMemoryVisitLog(VisitLog):
    """In-memory implementation of VisitLog with expiry."""

    def __init__(self, now: Callable[[], datetime] = utcnow) -> None:
        self.now = now
        self._entries: dict[str, tuple[Visit, datetime]] = {}

    async def put(self, key: str, visit: Visit, ttl: timedelta) -> None:
        """Store or replace a visit."""
        # Re-insert so a replaced key moves to the end, like a fresh write
        self._entries.pop(key, None)
        self._entries[key] = (visit, self.now() + ttl)

    async def scan(self, prefix: str, limit: int) -> list[Visit]:
        """List unexpired visits under a prefix, in write order."""
        now = self.now()
        visits = [
            visit
            for key, (visit, expires_at) in self._entries.items()
            if key.startswith(prefix) and expires_at > now
        ]
        return visits[:limit]
