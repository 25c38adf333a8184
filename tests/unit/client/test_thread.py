"""Unit tests for two-level thread assembly."""

from margin.client.thread import build_thread, sort_comments
from tests.conftest import make_comment


class TestSortComments:
    def test_ties_keep_fetched_order(self):
        comments = [
            make_comment("b", minutes=1),
            make_comment("a", minutes=1),
            make_comment("first", minutes=0),
        ]

        assert [c.id for c in sort_comments(comments)] == ["first", "b", "a"]


class TestBuildThread:
    def test_empty(self):
        assert build_thread([]) == []

    def test_replies_bucketed_under_parent(self):
        # Arrange
        comments = [
            make_comment("r2", minutes=4, parent_id="t1"),
            make_comment("t2", minutes=2),
            make_comment("t1", minutes=1),
            make_comment("r1", minutes=3, parent_id="t1"),
            make_comment("r3", minutes=5, parent_id="t2"),
        ]

        # Act
        thread = build_thread(comments)

        # Assert
        assert [e.comment.id for e in thread] == ["t1", "t2"]
        assert [r.id for r in thread[0].replies] == ["r1", "r2"]
        assert [r.id for r in thread[1].replies] == ["r3"]

    def test_replies_never_top_level(self):
        comments = [
            make_comment("t1", minutes=1),
            make_comment("r1", minutes=2, parent_id="t1"),
        ]

        thread = build_thread(comments)

        assert all(not e.comment.is_reply for e in thread)

    def test_deep_reply_attached_to_top_level_ancestor(self):
        comments = [
            make_comment("t1", minutes=1),
            make_comment("r1", minutes=2, parent_id="t1"),
            make_comment("rr1", minutes=3, parent_id="r1"),
        ]

        thread = build_thread(comments)

        assert [r.id for r in thread[0].replies] == ["r1", "rr1"]

    def test_orphans_hidden(self):
        comments = [
            make_comment("t1", minutes=1),
            make_comment("orphan", minutes=2, parent_id="deleted"),
            make_comment("orphan-child", minutes=3, parent_id="orphan"),
        ]

        thread = build_thread(comments)

        assert len(thread) == 1
        assert thread[0].replies == []

    def test_cycle_hidden(self):
        comments = [
            make_comment("a", minutes=1, parent_id="b"),
            make_comment("b", minutes=2, parent_id="a"),
        ]

        assert build_thread(comments) == []
