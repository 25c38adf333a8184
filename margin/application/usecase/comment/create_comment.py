"""Create comment use case."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from margin.application.usecase.base import BaseUseCase
from margin.application.usecase.comment.item import CommentItem
from margin.domain.service import CommentService


class CreateCommentRequest(BaseModel):
    """Create comment request.

    Fields are untyped on purpose: the body is client-supplied JSON and the
    comment service reports type problems with its own messages, in order.
    """

    model_config = ConfigDict(extra="ignore")

    page_path: Any = None
    author_name: Any = None
    content: Any = None
    parent_id: Any = None
    website: Any = None  # Honeypot


CreateCommentResponse = CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a top-level comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Raw submission

        Returns:
            The stored comment in public shape

        Raises:
            ValidationError: If the submission is rejected (spam included)
            StoreError: If a store call fails
        """
        comment = await self.comment_service.create_comment(
            page_path=request.page_path,
            author_name=request.author_name,
            content=request.content,
            parent_id=request.parent_id,
            website=request.website,
        )
        return CommentItem.from_comment(comment)
