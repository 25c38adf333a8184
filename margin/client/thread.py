"""Two-level thread assembly.

The gateway only accepts replies to top-level comments, but older data may
hold replies to replies. Those are shown under their nearest top-level
ancestor. A reply whose ancestry never reaches a top-level comment of the
fetched set is dropped.
"""

from pydantic import BaseModel, ConfigDict

from margin.domain.model.comment import Comment
from margin.domain.value import CommentId


class ThreadEntry(BaseModel):
    """A top-level comment and its replies, both oldest first."""

    model_config = ConfigDict(frozen=True)

    comment: Comment
    replies: list[Comment] = []


def sort_comments(comments: list[Comment]) -> list[Comment]:
    """Order by created_at ascending; ties keep their fetched order."""
    return sorted(comments, key=lambda c: c.created_at)


def find_root(comment: Comment, by_id: dict[CommentId, Comment]) -> CommentId | None:
    """Id of the top-level comment a reply hangs under, if reachable."""
    seen: set[CommentId] = set()
    current = comment
    while current.parent_id is not None:
        if current.id in seen:
            return None
        seen.add(current.id)
        parent = by_id.get(current.parent_id)
        if parent is None:
            return None
        current = parent
    return current.id


def build_thread(comments: list[Comment]) -> list[ThreadEntry]:
    """Partition comments into top-level entries with reply buckets."""
    ordered = sort_comments(comments)
    by_id = {c.id: c for c in ordered}

    buckets: dict[CommentId, list[Comment]] = {
        c.id: [] for c in ordered if not c.is_reply
    }
    for comment in ordered:
        if not comment.is_reply:
            continue
        root = find_root(comment, by_id)
        if root is not None and root in buckets:
            buckets[root].append(comment)

    return [
        ThreadEntry(comment=c, replies=buckets[c.id])
        for c in ordered
        if not c.is_reply
    ]
