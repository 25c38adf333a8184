"""Comment domain service."""

from datetime import datetime
from typing import Any, Callable

import logfire

from margin.domain.error import ValidationError
from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.repository import CommentRepository
from margin.domain.value import (
    AUTHOR_NAME_MAX_LENGTH,
    CONTENT_MAX_LENGTH,
    AuthorName,
    CommentId,
    CommentText,
    PagePath,
)
from margin.util.clock import utcnow

from .base import Service


class CommentService(Service):
    """Domain service for reading and posting anonymous comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            now: Server clock used to stamp new comments
        """
        self.comment_repository = comment_repository
        self.now = now

    async def get_comments_for_page(self, page_path: str | None) -> list[Comment]:
        """Get all comments of a page, oldest first.

        Args:
            page_path: Page path to match

        Returns:
            Comments ordered by created_at ascending

        Raises:
            ValidationError: If page_path is missing
            StoreError: If the store query fails
        """
        if not page_path:
            raise ValidationError("page_path query parameter is required")

        with logfire.span("comment_service.get_comments_for_page", page_path=page_path):
            comments = await self.comment_repository.find_by_page(page_path)
            # Stores order server-side, the stable sort keeps ties in store order
            comments = sorted(comments, key=lambda c: c.created_at)
            logfire.info(
                "Comments retrieved for page",
                page_path=page_path,
                count=len(comments),
            )
            return comments

    async def create_comment(
        self,
        page_path: Any,
        author_name: Any,
        content: Any,
        parent_id: Any = None,
        website: Any = None,
    ) -> Comment:
        """Validate a submission and write it to the store.

        Checks run in a fixed order and the first failure wins: honeypot,
        page_path, author_name, content, parent_id. Nothing is written
        unless all of them pass.

        Args:
            page_path: Page the comment belongs to
            author_name: Commenter name
            content: Comment body
            parent_id: Top-level comment being replied to (optional)
            website: Honeypot field, must be empty

        Returns:
            Stored comment with its store-assigned id

        Raises:
            ValidationError: If any check fails (spam included)
            StoreError: If a store call fails
        """
        with logfire.span(
            "comment_service.create_comment",
            page_path=page_path if isinstance(page_path, str) else None,
            parent_id=parent_id if isinstance(parent_id, str) else None,
        ):
            if website:
                logfire.warn("Honeypot field filled, submission dropped")
                raise ValidationError("Invalid submission")

            if not isinstance(page_path, str) or not page_path.startswith("/"):
                raise ValidationError("page_path is required and must start with /")

            if not _within(author_name, AUTHOR_NAME_MAX_LENGTH):
                raise ValidationError(
                    f"author_name is required (max {AUTHOR_NAME_MAX_LENGTH} chars)"
                )

            if not _within(content, CONTENT_MAX_LENGTH):
                raise ValidationError(
                    f"content is required (max {CONTENT_MAX_LENGTH} chars)"
                )

            parent_comment_id = await self._resolve_parent(page_path, parent_id)

            draft = CommentDraft(
                page_path=PagePath(page_path),
                author_name=AuthorName(author_name),
                content=CommentText(content),
                created_at=self.now(),
                parent_id=parent_comment_id,
            )

            saved = await self.comment_repository.add(draft)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                page_path=saved.page_path,
                is_reply=saved.is_reply,
            )
            return saved

    async def _resolve_parent(self, page_path: str, parent_id: Any) -> CommentId | None:
        """Check that a reply targets a top-level comment of the same page.

        Threads are two levels deep: replying to a reply is rejected.
        """
        if parent_id is None or parent_id == "":
            return None
        if not isinstance(parent_id, str):
            raise ValidationError("parent_id must be a string")

        parent = await self.comment_repository.find_by_id(CommentId(parent_id))
        if parent is None:
            logfire.warn("Parent comment not found", parent_id=parent_id)
            raise ValidationError("Parent comment not found")
        if parent.page_path != page_path:
            logfire.warn(
                "Parent comment belongs to another page",
                parent_id=parent_id,
                parent_page_path=parent.page_path,
                target_page_path=page_path,
            )
            raise ValidationError("Parent comment does not belong to this page")
        if parent.is_reply:
            raise ValidationError("Replies can only be posted to top-level comments")
        return parent.id


def _within(value: Any, max_length: int) -> bool:
    """Whether value is a string of 1..max_length characters once trimmed."""
    return isinstance(value, str) and 1 <= len(value.strip()) <= max_length
