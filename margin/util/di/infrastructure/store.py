"""Document store infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from margin.config import Settings
from margin.domain.repository import CommentRepository
from margin.persistence.firestore.repository import FirestoreCommentRepository
from margin.persistence.supabase.repository import SupabaseCommentRepository
from margin.util.di.base import ProviderBase
from margin.util.error import ConfigurationError


class StoreProvider(ProviderBase):
    """Document store component base."""

    __mock_component__ = "store"


class ProdStoreProvider(StoreProvider):
    """Production store provider using the configured REST backend."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client for store calls.

        Closed when the application container closes.
        """
        async with httpx.AsyncClient(timeout=settings.store.timeout) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, client: httpx.AsyncClient, settings: Settings
    ) -> CommentRepository:
        """Provide the comment repository for the configured backend.

        Raises:
            ConfigurationError: If production runs with placeholder credentials
        """
        if settings.store.backend == "supabase":
            credentials = settings.supabase.api_key
            repository: CommentRepository = SupabaseCommentRepository(
                client, settings.supabase
            )
        else:
            credentials = settings.firestore.api_key
            repository = FirestoreCommentRepository(client, settings.firestore)

        if settings.environment == "production" and credentials == "CHANGE_ME":
            raise ConfigurationError(
                f"{settings.store.backend} credentials must be configured"
            )

        logfire.info("Comment store configured", backend=settings.store.backend)
        return repository
