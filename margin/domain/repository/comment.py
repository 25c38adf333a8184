"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.value import CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for the comments collection of a document store.
    Implementations translate to and from the store's native format and
    always return fully resolved `created_at` datetimes.
    """

    @abstractmethod
    async def find_by_page(self, page_path: str) -> List[Comment]:
        """Find all comments of a page.

        Args:
            page_path: Exact page path to match

        Returns:
            Comments ordered by created_at ascending

        Raises:
            StoreError: If the store call fails
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: Store-assigned identifier

        Returns:
            The comment if found, None otherwise

        Raises:
            StoreError: If the store call fails
        """
        pass

    @abstractmethod
    async def add(self, draft: CommentDraft) -> Comment:
        """Insert a new comment.

        Args:
            draft: Validated comment payload

        Returns:
            The stored comment, with its store-assigned id

        Raises:
            StoreError: If the store write fails
        """
        pass
