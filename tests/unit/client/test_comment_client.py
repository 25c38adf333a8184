"""Unit tests for CommentClient."""

import asyncio
from datetime import timezone
from typing import Optional

import pytest

from margin.client.backend import BackendError, CommentBackend, StoreCommentBackend
from margin.client.comments import NAME_KEY, CommentClient
from margin.client.storage import MemoryStorage
from margin.domain.model.comment import Comment
from margin.domain.service import CommentService
from margin.persistence.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment

PAGE = "/blog/post-1"


class FlakyBackend(CommentBackend):
    """Backend that fails on demand and records posts."""

    def __init__(self, inner: CommentBackend):
        self.inner = inner
        self.fail_fetch = False
        self.fail_post = False
        self.posts: list[tuple] = []
        self.seen_submitting: list[bool] = []
        self.client: Optional[CommentClient] = None

    async def fetch(self, page_path: str) -> list[Comment]:
        if self.fail_fetch:
            raise BackendError("gateway down")
        return await self.inner.fetch(page_path)

    async def post(self, page_path, author_name, content, parent_id=None) -> Comment:
        if self.client is not None:
            form = self.client.reply_form if parent_id else self.client.form
            self.seen_submitting.append(form.submitting)
        self.posts.append((page_path, author_name, content, parent_id))
        if self.fail_post:
            raise BackendError("write refused", status_code=500)
        return await self.inner.post(page_path, author_name, content, parent_id)


class SlowBackend(CommentBackend):
    """Backend whose posts wait until released."""

    def __init__(self, inner: CommentBackend):
        self.inner = inner
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch(self, page_path: str) -> list[Comment]:
        return await self.inner.fetch(page_path)

    async def post(self, page_path, author_name, content, parent_id=None) -> Comment:
        self.started.set()
        await self.release.wait()
        return await self.inner.post(page_path, author_name, content, parent_id)


@pytest.fixture
def repository():
    return InMemoryCommentRepository()


@pytest.fixture
def backend(repository):
    return FlakyBackend(StoreCommentBackend(CommentService(repository)))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(backend, storage):
    comment_client = CommentClient(PAGE, backend, storage=storage, tz=timezone.utc)
    backend.client = comment_client
    return comment_client


class TestLoadAndRender:
    @pytest.mark.asyncio
    async def test_init_prefills_name_and_renders(self, client, storage, repository):
        # Arrange
        storage.set(NAME_KEY, "Ada")
        await repository.save(make_comment("t1"))

        # Act
        await client.init()

        # Assert
        assert client.form.author_name == "Ada"
        assert [i.id for i in client.container.items] == ["t1"]

    @pytest.mark.asyncio
    async def test_empty_page_shows_placeholder(self, client):
        await client.init()

        assert client.container.placeholder == "No comments yet. Be the first!"

    @pytest.mark.asyncio
    async def test_load_failure_is_soft(self, client, backend):
        backend.fail_fetch = True

        assert await client.load() == []

    @pytest.mark.asyncio
    async def test_load_sorted(self, client, repository):
        await repository.save(make_comment("b", minutes=2))
        await repository.save(make_comment("a", minutes=1))

        comments = await client.load()

        assert [c.id for c in comments] == ["a", "b"]


class TestSubmit:
    @pytest.mark.asyncio
    async def test_successful_submit(self, client, storage, backend):
        # Act
        result = await client.submit("  Ada ", " Hello ")

        # Assert
        assert result is True
        assert backend.posts == [(PAGE, "Ada", "Hello", None)]
        assert backend.seen_submitting == [True]
        assert client.form.content == ""
        assert client.form.submitting is False
        assert client.form.submit_label == "Post"
        assert storage.get(NAME_KEY) == "Ada"
        assert len(client.container.items) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,content,website",
        [("", "Hello", ""), ("Ada", "   ", ""), ("Ada", "Hello", "http://spam")],
    )
    async def test_incomplete_or_spam_submit_does_nothing(
        self, client, backend, name, content, website
    ):
        result = await client.submit(name, content, website=website)

        assert result is False
        assert backend.posts == []

    @pytest.mark.asyncio
    async def test_failed_submit_keeps_content(self, client, backend, storage):
        backend.fail_post = True

        result = await client.submit("Ada", "Hello")

        assert result is False
        assert client.form.content == "Hello"
        assert client.form.submit_enabled is True
        assert storage.get(NAME_KEY) is None

    @pytest.mark.asyncio
    async def test_second_submit_ignored_while_posting(self, backend, storage):
        # Arrange
        slow = SlowBackend(backend)
        client = CommentClient(PAGE, slow, storage=storage, tz=timezone.utc)
        first = asyncio.create_task(client.submit("Ada", "Hello"))
        await slow.started.wait()

        # Act
        second = await client.submit("Ada", "Hello")
        assert client.form.submit_enabled is False
        slow.release.set()
        result = await first

        # Assert
        assert second is False
        assert result is True
        assert [p[2] for p in backend.posts] == ["Hello"]
        assert client.form.submit_enabled is True


class TestReplies:
    @pytest.mark.asyncio
    async def test_toggle_opens_and_closes(self, client):
        parent = make_comment("t1")

        form = client.toggle_reply(parent)
        assert form is client.reply_form
        assert form.parent_id == "t1"

        assert client.toggle_reply(parent) is None
        assert client.reply_form is None

    @pytest.mark.asyncio
    async def test_only_one_reply_form_open(self, client):
        first = client.toggle_reply(make_comment("t1"))
        second = client.toggle_reply(make_comment("t2"))

        assert client.reply_form is second
        assert second is not first

    def test_replies_cannot_be_answered(self, client):
        with pytest.raises(ValueError):
            client.toggle_reply(make_comment("r1", parent_id="t1"))

    @pytest.mark.asyncio
    async def test_submit_reply_closes_form_and_reloads(self, client, backend):
        # Arrange
        await client.submit("Ada", "Hello")
        parent = client.container.comments[0]
        form = client.toggle_reply(parent)
        form.author_name = "Grace"
        form.content = "Hi Ada"

        # Act
        result = await client.submit_reply(form)

        # Assert
        assert result is True
        assert backend.posts[-1] == (PAGE, "Grace", "Hi Ada", parent.id)
        assert backend.seen_submitting[-1] is True
        assert client.reply_form is None
        assert len(client.container.items[0].replies) == 1

    @pytest.mark.asyncio
    async def test_failed_reply_keeps_form_open(self, client, backend):
        form = client.toggle_reply(make_comment("t1"))
        form.author_name = "Grace"
        form.content = "Hi"
        backend.fail_post = True

        result = await client.submit_reply(form)

        assert result is False
        assert client.reply_form is form
        assert form.content == "Hi"

    @pytest.mark.asyncio
    async def test_reply_form_prefilled_with_name(self, client):
        client.form.author_name = "Ada"

        form = client.toggle_reply(make_comment("t1"))

        assert form.author_name == "Ada"


class TestLocale:
    @pytest.mark.asyncio
    async def test_set_locale_relabels_without_fetching(self, client, backend):
        # Arrange
        await client.init()
        form = client.toggle_reply(make_comment("t1"))
        backend.fail_fetch = True

        # Act
        client.set_locale("zh")

        # Assert
        assert client.form.submit_label == "发表评论"
        assert client.form.name_placeholder == "你的名字"
        assert client.form.content_placeholder == "写下你的评论..."
        assert form.submit_label == "回复"
        assert form.content_placeholder == "写下你的回复..."
        assert form.cancel_label == "取消"
        assert client.container.placeholder == "还没有评论，来做第一个吧！"

    def test_unknown_locale_rejected(self, client):
        with pytest.raises(ValueError):
            client.set_locale("fr")

    def test_independent_clients(self, backend):
        first = CommentClient("/a", backend, locale="en")
        second = CommentClient("/b", backend, locale="zh")

        first.toggle_reply(make_comment("t1", page_path="/a"))

        assert second.reply_form is None
        assert second.form.submit_label == "发表评论"
        assert first.form.submit_label == "Post"
