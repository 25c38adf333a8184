"""Build client objects from settings."""

from typing import Optional

import httpx

from margin.config import Settings

from .backend import GatewayCommentBackend
from .comments import CommentClient
from .storage import FileStorage, MemoryStorage
from .tracker import VisitTracker


def create_comment_client(
    page_path: str,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> CommentClient:
    """Comment client talking to the configured gateway.

    The author name is remembered in the configured state file.
    """
    settings = settings or Settings()
    backend = GatewayCommentBackend(settings.client.api_base_url, client=client)
    return CommentClient(
        page_path,
        backend,
        storage=FileStorage(settings.client.state_file),
        locale=settings.client.locale,
    )


def create_visit_tracker(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> VisitTracker:
    """Visit tracker with a fresh session."""
    settings = settings or Settings()
    return VisitTracker(
        settings.client.api_base_url,
        session=MemoryStorage(),
        client=client,
        timeout=settings.client.track_timeout,
    )
