"""Database-backed repositories."""

from .visit import PostgresVisitLog, UnboundVisitLog

__all__ = [
    "PostgresVisitLog",
    "UnboundVisitLog",
]
