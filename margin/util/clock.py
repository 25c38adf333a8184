"""Server clock."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
