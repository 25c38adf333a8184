"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from margin.domain.repository.comment import CommentRepository
from margin.domain.repository.visit import VisitLog

__all__ = [
    "CommentRepository",
    "VisitLog",
]
