"""Domain models."""

from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.model.visit import Visit, VisitDay

__all__ = [
    "Comment",
    "CommentDraft",
    "Visit",
    "VisitDay",
]
