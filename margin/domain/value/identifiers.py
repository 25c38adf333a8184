"""Identifiers for domain entities.

Comment ids are assigned by the document store and are opaque strings
(Firestore document ids, Supabase UUIDs rendered as text).
"""

from typing import NewType

CommentId = NewType("CommentId", str)
