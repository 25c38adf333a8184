"""Comment widget for one page."""

from datetime import tzinfo
from typing import Optional

from margin.domain.model.comment import Comment
from margin.util.logging import get_logger

from .backend import BackendError, CommentBackend
from .forms import CommentForm, ReplyForm
from .i18n import get_messages
from .render import CommentContainer
from .storage import MemoryStorage, Storage
from .thread import build_thread, sort_comments

logger = get_logger(__name__)

# Storage key of the last author name that posted successfully
NAME_KEY = "comment_name"


class CommentClient:
    """Owns the comment thread of a single page.

    Every piece of state lives on the instance, so independent clients for
    different pages can run side by side.
    """

    def __init__(
        self,
        page_path: str,
        backend: CommentBackend,
        storage: Optional[Storage] = None,
        locale: str = "en",
        tz: Optional[tzinfo] = None,
    ) -> None:
        """Initialize comment client.

        Args:
            page_path: Page whose thread this client owns
            backend: Where comments are read from and posted to
            storage: Persistent storage for the author name
            locale: Interface language ("en" or "zh")
            tz: Display time zone (local zone when omitted)
        """
        self.page_path = page_path
        self.backend = backend
        self.storage = storage if storage is not None else MemoryStorage()
        self.locale = locale
        self.messages = get_messages(locale)
        self.container = CommentContainer(tz=tz)
        self.form = CommentForm(self.messages)
        self.reply_form: Optional[ReplyForm] = None

    async def init(self) -> None:
        """Restore the remembered name, then load and render the thread."""
        saved_name = self.storage.get(NAME_KEY)
        if saved_name:
            self.form.author_name = saved_name
        await self.refresh()

    async def load(self, page_path: Optional[str] = None) -> list[Comment]:
        """Fetch a page's comments, oldest first.

        Never raises: a failed fetch logs a warning and yields no comments.

        Args:
            page_path: Page to fetch (this client's page when omitted)
        """
        page_path = page_path or self.page_path
        try:
            comments = await self.backend.fetch(page_path)
        except BackendError as e:
            logger.warning(f"Failed to load comments for {page_path}: {e}")
            return []
        return sort_comments(comments)

    def render(self, comments: list[Comment]) -> None:
        """Replace the rendered thread.

        Clearing the container also discards any open reply form.
        """
        self.reply_form = None
        self.container.render(
            build_thread(comments),
            empty_message=self.messages.empty,
            reply_label=self.messages.reply_label,
        )

    async def refresh(self) -> None:
        self.render(await self.load())

    async def submit(
        self,
        author_name: str,
        content: str,
        parent_id: Optional[str] = None,
        website: str = "",
    ) -> bool:
        """Post from the main form.

        Returns:
            True if the comment was stored and the thread reloaded
        """
        self.form.author_name = author_name
        self.form.content = content
        self.form.website = website
        return await self._submit_form(self.form, parent_id)

    def toggle_reply(self, parent: Comment) -> Optional[ReplyForm]:
        """Open the reply form under a top-level comment, or close it.

        At most one reply form is open: opening one closes the other.

        Returns:
            The opened form, or None if this call closed it

        Raises:
            ValueError: If parent is itself a reply
        """
        if parent.is_reply:
            raise ValueError("Replies can only be posted to top-level comments")

        if self.reply_form is not None and self.reply_form.parent.id == parent.id:
            self.reply_form = None
            return None

        self.reply_form = ReplyForm(
            parent, self.messages, author_name=self.form.author_name
        )
        return self.reply_form

    def close_reply(self) -> None:
        self.reply_form = None

    async def submit_reply(self, form: ReplyForm) -> bool:
        """Post a reply form; on success the form closes and the thread reloads."""
        if form is not self.reply_form:
            logger.warning("Ignoring a reply form that is no longer open")
            return False
        return await self._submit_form(form, form.parent_id)

    def set_locale(self, locale: str) -> None:
        """Switch language in place, without fetching again."""
        self.messages = get_messages(locale)
        self.locale = locale
        self.form.messages = self.messages
        if self.reply_form is not None:
            self.reply_form.messages = self.messages
        self.container.relabel(self.messages.empty, self.messages.reply_label)

    async def _submit_form(self, form: CommentForm, parent_id: Optional[str]) -> bool:
        name = form.author_name.strip()
        content = form.content.strip()
        if not name or not content or form.website:
            return False
        if form.submitting:
            return False

        form.submitting = True
        try:
            await self.backend.post(
                self.page_path, name, content, parent_id=parent_id
            )
        except BackendError as e:
            logger.warning(f"Failed to post comment on {self.page_path}: {e}")
            return False
        finally:
            form.submitting = False

        form.content = ""
        self.storage.set(NAME_KEY, name)
        self.form.author_name = name
        if form is self.reply_form:
            self.reply_form = None
        await self.refresh()
        return True
