"""Firestore REST implementation of the comment repository.

Talks to the Firestore REST API server-to-server, so browsers that cannot
reach googleapis.com never need to.
"""

import re
from typing import Optional

import httpx
import logfire

from margin.config import FirestoreSettings
from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.repository import CommentRepository
from margin.domain.value import CommentId
from margin.persistence.error import StoreError
from margin.persistence.firestore.codec import (
    build_page_query,
    document_to_comment,
    draft_to_fields,
    query_rows_to_comments,
)
from margin.persistence.http import read_json, send

DOCUMENT_ID = re.compile(r"[A-Za-z0-9_-]+")


class FirestoreCommentRepository(CommentRepository):
    """Comment repository backed by a Firestore collection."""

    def __init__(self, client: httpx.AsyncClient, settings: FirestoreSettings) -> None:
        """Initialize repository.

        Args:
            client: Shared HTTP client
            settings: Firestore project, API key and collection
        """
        self.client = client
        self.settings = settings

    @property
    def _params(self) -> dict[str, str]:
        return {"key": self.settings.api_key}

    @property
    def _collection_url(self) -> str:
        return f"{self.settings.documents_url}/{self.settings.collection}"

    async def find_by_page(self, page_path: str) -> list[Comment]:
        """Run a structured query on page_path, ordered by created_at."""
        message = "Firestore query failed"
        with logfire.span("firestore.run_query", page_path=page_path):
            response = await send(
                self.client,
                "POST",
                f"{self.settings.documents_url}:runQuery",
                message,
                params=self._params,
                json=build_page_query(self.settings.collection, page_path),
            )
            rows = read_json(response, message)
            if not isinstance(rows, list):
                raise StoreError(502, message, "Expected a list of query results")
            return query_rows_to_comments(rows)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Fetch one document by id, None if it does not exist."""
        if not comment_id or not DOCUMENT_ID.fullmatch(comment_id):
            return None

        message = "Firestore read failed"
        with logfire.span("firestore.get_document", comment_id=comment_id):
            response = await send(
                self.client,
                "GET",
                f"{self._collection_url}/{comment_id}",
                message,
                allow_not_found=True,
                params=self._params,
            )
            if response.status_code == 404:
                return None
            return document_to_comment(read_json(response, message))

    async def add(self, draft: CommentDraft) -> Comment:
        """Create a document with an auto-assigned id."""
        message = "Firestore write failed"
        with logfire.span("firestore.create_document", page_path=draft.page_path.root):
            response = await send(
                self.client,
                "POST",
                self._collection_url,
                message,
                params=self._params,
                json={"fields": draft_to_fields(draft)},
            )
            return document_to_comment(read_json(response, message))
