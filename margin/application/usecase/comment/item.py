"""Public comment shape."""

from datetime import datetime

from pydantic import BaseModel

from margin.domain.model.comment import Comment


class CommentItem(BaseModel):
    """Flat comment as exposed by the public API.

    parent_id is always present, null for top-level comments.
    """

    id: str
    page_path: str
    author_name: str
    content: str
    created_at: datetime
    parent_id: str | None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            id=comment.id,
            page_path=comment.page_path,
            author_name=comment.author_name,
            content=comment.content,
            created_at=comment.created_at,
            parent_id=comment.parent_id,
        )
