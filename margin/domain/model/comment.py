"""Comment entity.

Comments are anonymous and threaded two levels deep: a top-level comment
on a page, and replies to it. They are never edited or deleted.
"""

from datetime import datetime
from typing import Optional

from margin.domain.model.common import DomainModel
from margin.domain.value import AuthorName, CommentId, CommentText, PagePath


class Comment(DomainModel):
    """Comment as stored in the document store.

    No length rules are enforced here: anything the store returns is
    representable, including records written before validation existed.
    """

    id: CommentId
    page_path: str
    author_name: str
    content: str
    created_at: datetime
    parent_id: Optional[CommentId] = None

    @property
    def is_reply(self) -> bool:
        """Whether this comment answers another one."""
        return self.parent_id is not None


class CommentDraft(DomainModel):
    """Validated write payload, handed to a repository for insertion."""

    page_path: PagePath
    author_name: AuthorName
    content: CommentText
    created_at: datetime
    parent_id: Optional[CommentId] = None
