"""Comment backends used by the client.

A backend is the client's only way to reach comments. The gateway backend
speaks the public HTTP API; the store backend skips the gateway and talks to
the document store through the same domain service the gateway uses.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from margin.domain.error import ValidationError
from margin.domain.model.comment import Comment
from margin.domain.service import CommentService
from margin.persistence.error import StoreError

_comment_list = TypeAdapter(list[Comment])


class BackendError(Exception):
    """A backend could not complete a read or write."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class CommentBackend(ABC):
    """Capability interface for reading and posting comments."""

    @abstractmethod
    async def fetch(self, page_path: str) -> list[Comment]:
        """Fetch every comment of a page.

        Raises:
            BackendError: If the comments could not be fetched
        """
        pass

    @abstractmethod
    async def post(
        self,
        page_path: str,
        author_name: str,
        content: str,
        parent_id: Optional[str] = None,
    ) -> Comment:
        """Post a comment, or a reply when parent_id is given.

        Raises:
            BackendError: If the comment was not accepted
        """
        pass


class GatewayCommentBackend(CommentBackend):
    """Backend calling the comment gateway over HTTP."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize gateway backend.

        Args:
            base_url: Gateway origin, e.g. https://comments.example.com
            client: Shared HTTP client (a short-lived one per call when omitted)
            timeout: Timeout for the short-lived clients
        """
        self.base_url = base_url.rstrip("/")
        self.client = client
        self.timeout = timeout

    @property
    def comments_url(self) -> str:
        return f"{self.base_url}/api/comments"

    async def fetch(self, page_path: str) -> list[Comment]:
        response = await self._request("GET", params={"page_path": page_path})
        try:
            return _comment_list.validate_python(response.json())
        except (ValueError, SchemaError) as e:
            raise BackendError(f"Malformed comment list: {e}") from e

    async def post(
        self,
        page_path: str,
        author_name: str,
        content: str,
        parent_id: Optional[str] = None,
    ) -> Comment:
        body: dict[str, Any] = {
            "page_path": page_path,
            "author_name": author_name,
            "content": content,
        }
        if parent_id:
            body["parent_id"] = parent_id

        response = await self._request("POST", json=body)
        try:
            return Comment.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise BackendError(f"Malformed comment: {e}") from e

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            if self.client is not None:
                response = await self.client.request(method, self.comments_url, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, self.comments_url, **kwargs)
        except httpx.HTTPError as e:
            raise BackendError(f"Comment gateway unreachable: {e}") from e

        if response.is_error:
            raise BackendError(
                f"Comment gateway returned {response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )
        return response


class StoreCommentBackend(CommentBackend):
    """Backend talking to the document store directly.

    Goes through CommentService, so validation matches the gateway's.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def fetch(self, page_path: str) -> list[Comment]:
        try:
            return await self.comment_service.get_comments_for_page(page_path)
        except ValidationError as e:
            raise BackendError(e.reason, status_code=400) from e
        except StoreError as e:
            raise BackendError(e.message, status_code=e.status_code) from e

    async def post(
        self,
        page_path: str,
        author_name: str,
        content: str,
        parent_id: Optional[str] = None,
    ) -> Comment:
        try:
            return await self.comment_service.create_comment(
                page_path=page_path,
                author_name=author_name,
                content=content,
                parent_id=parent_id,
            )
        except ValidationError as e:
            raise BackendError(e.reason, status_code=400) from e
        except StoreError as e:
            raise BackendError(e.message, status_code=e.status_code) from e


def _error_detail(response: httpx.Response) -> str:
    """Readable reason from a gateway error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("error") or body)
    return str(body)
