"""Form state of the comment widget."""

from typing import Optional

from margin.domain.model.comment import Comment

from .i18n import Messages


class CommentForm:
    """Input state shared by the main form and reply forms."""

    def __init__(self, messages: Messages, author_name: str = "") -> None:
        self.messages = messages
        self.author_name = author_name
        self.content = ""
        # Honeypot, hidden from people
        self.website = ""
        self.submitting = False

    @property
    def parent_id(self) -> Optional[str]:
        return None

    @property
    def name_placeholder(self) -> str:
        return self.messages.name_placeholder

    @property
    def content_placeholder(self) -> str:
        return self.messages.content_placeholder

    @property
    def idle_label(self) -> str:
        return self.messages.submit_label

    @property
    def submit_label(self) -> str:
        """Submit control text, the busy label while a post is in flight."""
        return self.messages.busy_label if self.submitting else self.idle_label

    @property
    def submit_enabled(self) -> bool:
        return not self.submitting


class ReplyForm(CommentForm):
    """Inline form answering one top-level comment."""

    def __init__(self, parent: Comment, messages: Messages, author_name: str = "") -> None:
        super().__init__(messages, author_name)
        self.parent = parent

    @property
    def parent_id(self) -> Optional[str]:
        return self.parent.id

    @property
    def content_placeholder(self) -> str:
        return self.messages.reply_placeholder

    @property
    def idle_label(self) -> str:
        return self.messages.reply_label

    @property
    def cancel_label(self) -> str:
        return self.messages.cancel_label
