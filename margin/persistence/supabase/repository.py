"""Supabase (PostgREST) implementation of the comment repository."""

from typing import Optional

import httpx
import logfire

from margin.config import SupabaseSettings
from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.repository import CommentRepository
from margin.domain.value import CommentId
from margin.persistence.error import StoreError
from margin.persistence.http import read_json, send
from margin.persistence.mappers import draft_to_row, row_to_comment


class SupabaseCommentRepository(CommentRepository):
    """Comment repository backed by a Supabase table."""

    def __init__(self, client: httpx.AsyncClient, settings: SupabaseSettings) -> None:
        """Initialize repository.

        Args:
            client: Shared HTTP client
            settings: Project URL, anon key and table name
        """
        self.client = client
        self.settings = settings

    @property
    def _table_url(self) -> str:
        return f"{self.settings.url.rstrip('/')}/rest/v1/{self.settings.table}"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.settings.api_key,
            "Authorization": f"Bearer {self.settings.api_key}",
        }

    async def find_by_page(self, page_path: str) -> list[Comment]:
        """Select rows with an equal page_path, ordered by created_at."""
        message = "Supabase query failed"
        with logfire.span("supabase.select_comments", page_path=page_path):
            response = await send(
                self.client,
                "GET",
                self._table_url,
                message,
                headers=self._headers,
                params={
                    "select": "*",
                    "page_path": f"eq.{page_path}",
                    "order": "created_at.asc",
                },
            )
            return [row_to_comment(row) for row in self._rows(response, message)]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Select one row by id, None if absent."""
        if not comment_id:
            return None

        message = "Supabase read failed"
        with logfire.span("supabase.select_comment", comment_id=comment_id):
            response = await send(
                self.client,
                "GET",
                self._table_url,
                message,
                headers=self._headers,
                params={"select": "*", "id": f"eq.{comment_id}", "limit": "1"},
            )
            rows = self._rows(response, message)
            return row_to_comment(rows[0]) if rows else None

    async def add(self, draft: CommentDraft) -> Comment:
        """Insert a row and read back the stored representation."""
        message = "Supabase write failed"
        with logfire.span("supabase.insert_comment", page_path=draft.page_path.root):
            response = await send(
                self.client,
                "POST",
                self._table_url,
                message,
                headers={**self._headers, "Prefer": "return=representation"},
                json=draft_to_row(draft),
            )
            rows = self._rows(response, message)
            if not rows:
                raise StoreError(502, message, "Insert returned no row")
            return row_to_comment(rows[0])

    @staticmethod
    def _rows(response: httpx.Response, message: str) -> list[dict]:
        rows = read_json(response, message)
        if not isinstance(rows, list):
            raise StoreError(502, message, "Expected a list of rows")
        return rows
