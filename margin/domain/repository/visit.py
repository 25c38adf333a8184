"""Visit log interface."""

from abc import ABC, abstractmethod
from datetime import timedelta

from margin.domain.model.visit import Visit


class VisitLog(ABC):
    """Time-bucketed key-value log of page views.

    Keys look like `v:{YYYY-MM-DD}:{visit_key}` so a day is listed by
    prefix. Writing an existing key replaces its record.
    """

    @abstractmethod
    async def put(self, key: str, visit: Visit, ttl: timedelta) -> None:
        """Store a visit that expires after `ttl`.

        Raises:
            VisitLogUnavailableError: If the log is unbound or unreachable
        """
        pass

    @abstractmethod
    async def scan(self, prefix: str, limit: int) -> list[Visit]:
        """List unexpired visits whose key starts with `prefix`.

        Raises:
            VisitLogUnavailableError: If the log is unbound or unreachable
        """
        pass
