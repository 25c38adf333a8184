"""Unit tests for comment value objects."""

import pytest
from pydantic import ValidationError

from margin.domain.value import AuthorName, CommentText, PagePath


class TestPagePath:
    def test_absolute_path_accepted(self):
        assert PagePath("/blog/post-1").root == "/blog/post-1"

    def test_relative_path_rejected(self):
        with pytest.raises(ValidationError):
            PagePath("blog/post-1")


class TestAuthorName:
    def test_name_is_trimmed(self):
        assert AuthorName("  Ada ").root == "Ada"

    @pytest.mark.parametrize("value", ["", "   ", "a" * 51])
    def test_invalid_names_rejected(self, value):
        with pytest.raises(ValidationError):
            AuthorName(value)


class TestCommentText:
    def test_limit_counts_trimmed_length(self):
        assert len(CommentText("  " + "x" * 2000 + "  ").root) == 2000

    def test_over_limit_rejected(self):
        with pytest.raises(ValidationError):
            CommentText("x" * 2001)
