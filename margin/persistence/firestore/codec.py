"""Firestore REST wire format.

Firestore documents wrap every field in a typed value, e.g.
`{"author_name": {"stringValue": "Ada"}}`, and carry their id as the last
segment of `name`. These helpers are the only place that knows this shape.
"""

from datetime import datetime
from typing import Any

from margin.domain.model.comment import Comment, CommentDraft
from margin.domain.value import CommentId
from margin.persistence.timestamps import EPOCH, format_timestamp, parse_timestamp


def build_page_query(collection: str, page_path: str) -> dict[str, Any]:
    """Structured query for all comments of a page, oldest first."""
    return {
        "structuredQuery": {
            "from": [{"collectionId": collection}],
            "where": {
                "fieldFilter": {
                    "field": {"fieldPath": "page_path"},
                    "op": "EQUAL",
                    "value": {"stringValue": page_path},
                }
            },
            "orderBy": [
                {"field": {"fieldPath": "created_at"}, "direction": "ASCENDING"}
            ],
        }
    }


def draft_to_fields(draft: CommentDraft) -> dict[str, Any]:
    """Typed field map for a document write.

    `parent_id` is only written for replies.
    """
    fields: dict[str, Any] = {
        "page_path": {"stringValue": draft.page_path.root},
        "author_name": {"stringValue": draft.author_name.root},
        "content": {"stringValue": draft.content.root},
        "created_at": {"timestampValue": format_timestamp(draft.created_at)},
    }
    if draft.parent_id:
        fields["parent_id"] = {"stringValue": draft.parent_id}
    return fields


def document_to_comment(document: dict[str, Any]) -> Comment:
    """Flatten a Firestore document into a Comment.

    Total over well-formed documents: missing strings become "", a missing
    parent_id becomes None, and created_at falls back to the document's
    createTime and then to the epoch.
    """
    fields = document.get("fields") or {}
    name = document.get("name") or ""
    parent_id = _string(fields, "parent_id")

    return Comment(
        id=CommentId(name.split("/")[-1]),
        page_path=_string(fields, "page_path") or "",
        author_name=_string(fields, "author_name") or "",
        content=_string(fields, "content") or "",
        created_at=_created_at(document, fields),
        parent_id=CommentId(parent_id) if parent_id else None,
    )


def query_rows_to_comments(rows: list[dict[str, Any]]) -> list[Comment]:
    """Comments from a runQuery response.

    An empty result still carries one row holding only `readTime`.
    """
    return [document_to_comment(row["document"]) for row in rows if row.get("document")]


def _string(fields: dict[str, Any], key: str) -> str | None:
    value = fields.get(key) or {}
    return value.get("stringValue")


def _created_at(document: dict[str, Any], fields: dict[str, Any]) -> datetime:
    value = fields.get("created_at") or {}
    candidates = (
        value.get("timestampValue"),
        value.get("stringValue"),
        document.get("createTime"),
    )
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return parse_timestamp(candidate)
        except ValueError:
            continue
    return EPOCH
