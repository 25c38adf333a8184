"""Get comments use case."""

from pydantic import BaseModel

from margin.application.usecase.base import BaseUseCase
from margin.application.usecase.comment.item import CommentItem
from margin.domain.service import CommentService


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    page_path: str | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    page_path: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing every comment of a page."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Page to list

        Returns:
            Comments ordered by created_at ascending

        Raises:
            ValidationError: If page_path is missing
            StoreError: If the store query fails
        """
        comments = await self.comment_service.get_comments_for_page(request.page_path)
        items = [CommentItem.from_comment(c) for c in comments]
        return GetCommentsResponse(
            page_path=request.page_path or "",
            comments=items,
            total=len(items),
        )
