"""In-memory implementations for testing."""

from .comment import InMemoryCommentRepository
from .visit import InMemoryVisitLog

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryVisitLog",
]
