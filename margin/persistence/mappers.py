"""Mappers between store rows and domain models.

Domain models are immutable Pydantic models, so mapping is manual.
"""

from datetime import datetime
from typing import Any, Dict

from margin.domain.model import Comment, CommentDraft, Visit
from margin.domain.value import CommentId
from margin.persistence.timestamps import EPOCH, format_timestamp, parse_timestamp


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert a PostgREST row to a Comment.

    Args:
        row: Row as returned by the REST API

    Returns:
        Comment domain model
    """
    created_at = row.get("created_at")
    if isinstance(created_at, str):
        try:
            created_at = parse_timestamp(created_at)
        except ValueError:
            created_at = EPOCH
    elif not isinstance(created_at, datetime):
        created_at = EPOCH

    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(str(row.get("id") or "")),
        page_path=row.get("page_path") or "",
        author_name=row.get("author_name") or "",
        content=row.get("content") or "",
        created_at=created_at,
        parent_id=CommentId(str(parent_id)) if parent_id else None,
    )


def draft_to_row(draft: CommentDraft) -> Dict[str, Any]:
    """Convert a CommentDraft to an insertable row (id assigned by the store).

    Args:
        draft: Validated comment payload

    Returns:
        Row dictionary, parent_id only present for replies
    """
    row: Dict[str, Any] = {
        "page_path": draft.page_path.root,
        "author_name": draft.author_name.root,
        "content": draft.content.root,
        "created_at": format_timestamp(draft.created_at),
    }
    if draft.parent_id:
        row["parent_id"] = draft.parent_id
    return row


def row_to_visit(row: Dict[str, Any]) -> Visit:
    """Convert a visits table row to a Visit.

    Args:
        row: Database row as dict, payload stored as JSON

    Returns:
        Visit domain model
    """
    return Visit.model_validate(row["payload"])
