"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import logfire
import pytest

from margin.domain.model.comment import Comment
from margin.domain.value import CommentId

# Keep spans local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc)


def make_comment(
    comment_id: str,
    minutes: int = 0,
    parent_id: Optional[str] = None,
    page_path: str = "/blog/post-1",
    author_name: str = "Ada",
    content: str = "Hello",
) -> Comment:
    """Helper function to build stored comments for tests.

    Args:
        comment_id: Store id
        minutes: Offset from BASE_TIME, orders comments
        parent_id: Parent comment id for replies
        page_path: Page the comment belongs to
        author_name: Commenter name
        content: Comment body

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(comment_id),
        page_path=page_path,
        author_name=author_name,
        content=content,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        parent_id=CommentId(parent_id) if parent_id else None,
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Run every test from an empty directory so no .env file leaks in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENVIRONMENT", "test")
