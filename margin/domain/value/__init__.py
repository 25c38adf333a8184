"""Domain value objects and identifiers."""

from margin.domain.value.identifiers import CommentId
from margin.domain.value.types import (
    AUTHOR_NAME_MAX_LENGTH,
    CONTENT_MAX_LENGTH,
    AuthorName,
    CommentText,
    PagePath,
)

__all__ = [
    "AUTHOR_NAME_MAX_LENGTH",
    "CONTENT_MAX_LENGTH",
    "AuthorName",
    "CommentId",
    "CommentText",
    "PagePath",
]
