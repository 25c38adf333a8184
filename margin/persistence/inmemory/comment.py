"""In-memory comment repository for testing."""

from typing import Optional
from uuid import uuid4

from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.repository.comment import CommentRepository
from margin.domain.value import CommentId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Ids are random 20-character strings, like Firestore auto-ids.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_page(self, page_path: str) -> list[Comment]:
        """Find all comments of a page, oldest first."""
        comments = [c for c in self._comments.values() if c.page_path == page_path]

        # Stable: ties keep insertion order
        comments.sort(key=lambda c: c.created_at)

        return comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def add(self, draft: CommentDraft) -> Comment:
        """Store a draft under a fresh id."""
        comment = Comment(
            id=CommentId(uuid4().hex[:20]),
            page_path=draft.page_path.root,
            author_name=draft.author_name.root,
            content=draft.content.root,
            created_at=draft.created_at,
            parent_id=draft.parent_id,
        )
        self._comments[comment.id] = comment
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Store a fully formed comment as-is (test seeding)."""
        self._comments[comment.id] = comment
        return comment
