"""Page-view beacon.

One beacon per page per session. Failures are logged and otherwise ignored:
tracking must never get in the way of reading.
"""

import json
from uuid import uuid4

import httpx

from margin.util.logging import get_logger

from .storage import Storage

logger = get_logger(__name__)

SESSION_KEY = "_t:session"


def sent_key(page: str) -> str:
    """Session storage key marking a page as already tracked."""
    return f"_t:{page}"


class VisitTracker:
    """Sends at most one visit beacon per page for a session."""

    def __init__(
        self,
        base_url: str,
        session: Storage,
        client: httpx.AsyncClient | None = None,
        timeout: float = 3.0,
    ) -> None:
        """Initialize tracker.

        Args:
            base_url: Gateway origin
            session: Session-lifetime storage
            client: Shared HTTP client (a short-lived one per beacon when omitted)
            timeout: Timeout for the short-lived clients
        """
        self.track_url = f"{base_url.rstrip('/')}/api/track"
        self.session = session
        self.client = client
        self.timeout = timeout

    @property
    def session_id(self) -> str:
        session_id = self.session.get(SESSION_KEY)
        if not session_id:
            session_id = uuid4().hex
            self.session.set(SESSION_KEY, session_id)
        return session_id

    def visit_key(self, page: str) -> str:
        """Idempotency key of this session's view of a page."""
        return f"{self.session_id}:{page}"

    async def track(self, page: str) -> bool:
        """Send the beacon unless this session already did for the page.

        Returns:
            True if a beacon was attempted
        """
        key = sent_key(page)
        if self.session.get(key):
            return False

        # text/plain keeps browsers from preflighting the beacon
        data = json.dumps({"page": page, "visit_key": self.visit_key(page)})
        headers = {"Content-Type": "text/plain"}
        try:
            if self.client is not None:
                response = await self.client.post(self.track_url, content=data, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.track_url, content=data, headers=headers)
            if response.is_error:
                logger.debug(f"Visit beacon for {page} answered {response.status_code}")
        except httpx.HTTPError as e:
            logger.debug(f"Visit beacon for {page} failed: {e}")

        self.session.set(key, "1")
        return True
