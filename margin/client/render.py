"""HTML rendering of a comment thread."""

import html
from datetime import datetime, tzinfo
from typing import Optional

from pydantic import BaseModel, ConfigDict

from margin.domain.model.comment import Comment
from margin.domain.value import CommentId

from .thread import ThreadEntry

AVATAR_COLORS = ["#A855F7", "#06B6D4", "#F472B6", "#FB923C", "#10B981"]


def avatar_initial(name: str) -> str:
    """Uppercased first letter of the name, or '?'."""
    name = name.strip()
    return name[0].upper() if name else "?"


def avatar_color(name: str) -> str:
    """Palette colour picked by name length."""
    return AVATAR_COLORS[len(name) % len(AVATAR_COLORS)]


def format_time(ts: datetime, tz: Optional[tzinfo] = None) -> str:
    """Short date and time, e.g. 'Mar 4, 2025 09:30'.

    Converted to tz, or to the local zone when tz is None.
    """
    local = ts.astimezone(tz)
    return f"{local:%b} {local.day}, {local.year} {local:%H:%M}"


class RenderedComment(BaseModel):
    """One comment as displayed."""

    model_config = ConfigDict(frozen=True)

    id: CommentId
    initial: str
    color: str
    time: str
    html: str
    replies: list["RenderedComment"] = []


def render_comment(
    comment: Comment, tz: Optional[tzinfo] = None, reply_label: Optional[str] = None
) -> str:
    """HTML of a single comment. Name and content are escaped."""
    initial = html.escape(avatar_initial(comment.author_name))
    color = avatar_color(comment.author_name)
    reply_button = (
        f'\n    <button class="comment-reply-btn" data-id="{html.escape(comment.id)}">'
        f"{html.escape(reply_label)}</button>"
        if reply_label
        else ""
    )
    return (
        f'<div class="comment-item" data-id="{html.escape(comment.id)}">\n'
        f'  <div class="comment-avatar" style="background:{color}">{initial}</div>\n'
        f'  <div class="comment-body">\n'
        f'    <div class="comment-meta">\n'
        f'      <span class="comment-author">{html.escape(comment.author_name)}</span>\n'
        f'      <span class="comment-time">{format_time(comment.created_at, tz)}</span>\n'
        f"    </div>\n"
        f'    <div class="comment-text">{html.escape(comment.content)}</div>'
        f"{reply_button}\n"
        f"  </div>\n"
        f"</div>"
    )


class CommentContainer:
    """The rendered comment list of one page.

    Holds either the empty-state placeholder or the rendered thread, never
    both. It is the only place the last fetched comments are kept.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz
        self.items: list[RenderedComment] = []
        self.placeholder: Optional[str] = None
        self.comments: list[Comment] = []

    def clear(self) -> None:
        self.items = []
        self.placeholder = None
        self.comments = []

    def show_empty(self, message: str) -> None:
        self.clear()
        self.placeholder = message

    def render(self, thread: list[ThreadEntry], empty_message: str, reply_label: str) -> None:
        """Replace the contents with a thread, or the placeholder if empty."""
        if not thread:
            self.show_empty(empty_message)
            return

        self.clear()
        for entry in thread:
            replies = [self._render_one(r, None) for r in entry.replies]
            self.items.append(self._render_one(entry.comment, reply_label, replies))
            self.comments.append(entry.comment)
            self.comments.extend(entry.replies)

    def relabel(self, empty_message: str, reply_label: str) -> None:
        """Swap localized strings without touching the comments."""
        if self.placeholder is not None:
            self.placeholder = empty_message
            return
        self.items = [
            item.model_copy(
                update={"html": render_comment(self.find(item.id), self.tz, reply_label)}
            )
            for item in self.items
        ]

    def find(self, comment_id: str) -> Optional[Comment]:
        return next((c for c in self.comments if c.id == comment_id), None)

    @property
    def html(self) -> str:
        if self.placeholder is not None:
            return f'<p class="comments-empty">{html.escape(self.placeholder)}</p>'
        blocks = []
        for item in self.items:
            blocks.append(item.html)
            if item.replies:
                inner = "\n".join(r.html for r in item.replies)
                blocks.append(f'<div class="comment-replies">\n{inner}\n</div>')
        return "\n".join(blocks)

    def _render_one(
        self,
        comment: Comment,
        reply_label: Optional[str],
        replies: Optional[list[RenderedComment]] = None,
    ) -> RenderedComment:
        return RenderedComment(
            id=comment.id,
            initial=avatar_initial(comment.author_name),
            color=avatar_color(comment.author_name),
            time=format_time(comment.created_at, self.tz),
            html=render_comment(comment, self.tz, reply_label),
            replies=replies or [],
        )
