"""Unit tests for FirestoreCommentRepository against a mocked REST API."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from margin.config import FirestoreSettings
from margin.domain.model.comment import CommentDraft
from margin.domain.value import AuthorName, CommentId, CommentText, PagePath
from margin.persistence.error import StoreError
from margin.persistence.firestore.repository import FirestoreCommentRepository

SETTINGS = FirestoreSettings(project_id="blog", api_key="key-123")
PREFIX = "projects/blog/databases/(default)/documents/comments"


def _doc(doc_id, created_at, parent_id=None):
    fields = {
        "page_path": {"stringValue": "/p"},
        "author_name": {"stringValue": "Ada"},
        "content": {"stringValue": "Hello"},
        "created_at": {"timestampValue": created_at},
    }
    if parent_id:
        fields["parent_id"] = {"stringValue": parent_id}
    return {"name": f"{PREFIX}/{doc_id}", "fields": fields}


def _repository(handler) -> FirestoreCommentRepository:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirestoreCommentRepository(client, SETTINGS)


class TestFindByPage:
    @pytest.mark.asyncio
    async def test_run_query_maps_documents(self):
        # Arrange
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["key"] = request.url.params.get("key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json=[
                    {"document": _doc("a", "2025-03-04T09:30:00Z")},
                    {"document": _doc("b", "2025-03-04T09:31:00Z", parent_id="a")},
                    {"readTime": "2025-03-04T10:00:00Z"},
                ],
            )

        # Act
        comments = await _repository(handler).find_by_page("/p")

        # Assert
        assert seen["method"] == "POST"
        assert seen["path"].endswith("/documents:runQuery")
        assert seen["key"] == "key-123"
        where = seen["body"]["structuredQuery"]["where"]["fieldFilter"]
        assert where["value"] == {"stringValue": "/p"}
        assert [c.id for c in comments] == ["a", "b"]
        assert comments[1].parent_id == "a"

    @pytest.mark.asyncio
    async def test_empty_result(self):
        def handler(request):
            return httpx.Response(200, json=[{"readTime": "2025-03-04T10:00:00Z"}])

        assert await _repository(handler).find_by_page("/p") == []

    @pytest.mark.asyncio
    async def test_store_status_passed_through(self):
        def handler(request):
            return httpx.Response(403, text="PERMISSION_DENIED")

        with pytest.raises(StoreError) as exc_info:
            await _repository(handler).find_by_page("/p")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Firestore query failed"
        assert exc_info.value.detail == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_unreachable_store_is_bad_gateway(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreError) as exc_info:
            await _repository(handler).find_by_page("/p")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_malformed_body_is_bad_gateway(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(StoreError) as exc_info:
            await _repository(handler).find_by_page("/p")

        assert exc_info.value.status_code == 502


class TestFindById:
    @pytest.mark.asyncio
    async def test_existing_document(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path.endswith("/comments/a")
            return httpx.Response(200, json=_doc("a", "2025-03-04T09:30:00Z"))

        comment = await _repository(handler).find_by_id(CommentId("a"))

        assert comment is not None
        assert comment.id == "a"

    @pytest.mark.asyncio
    async def test_missing_document_is_none(self):
        def handler(request):
            return httpx.Response(404, json={"error": {"status": "NOT_FOUND"}})

        assert await _repository(handler).find_by_id(CommentId("gone")) is None

    @pytest.mark.asyncio
    async def test_id_with_slash_not_requested(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert await _repository(handler).find_by_id(CommentId("a/b")) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("comment_id", ["abc?x=1", "abc#frag", "a b", "..", "%2e"])
    async def test_ids_outside_document_charset_not_requested(self, comment_id):
        def handler(request):
            raise AssertionError("no request expected")

        assert await _repository(handler).find_by_id(CommentId(comment_id)) is None


class TestAdd:
    @pytest.mark.asyncio
    async def test_add_posts_typed_fields_and_returns_stored_comment(self):
        # Arrange
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json=_doc("new1", "2025-03-04T09:30:00.000000Z", parent_id="a")
            )

        draft = CommentDraft(
            page_path=PagePath("/p"),
            author_name=AuthorName("Ada"),
            content=CommentText("Hello"),
            created_at=datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc),
            parent_id=CommentId("a"),
        )

        # Act
        comment = await _repository(handler).add(draft)

        # Assert
        assert seen["path"].endswith("/documents/comments")
        fields = seen["body"]["fields"]
        assert fields["page_path"] == {"stringValue": "/p"}
        assert fields["parent_id"] == {"stringValue": "a"}
        assert comment.id == "new1"
        assert comment.parent_id == "a"
