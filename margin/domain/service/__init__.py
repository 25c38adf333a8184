"""Domain services."""

from .comment_service import CommentService
from .visit_service import VisitService

__all__ = [
    "CommentService",
    "VisitService",
]
