"""Unit tests for GetCommentsUseCase."""

import pytest

from margin.application.usecase.comment import GetCommentsRequest, GetCommentsUseCase
from margin.domain.error import ValidationError
from margin.domain.repository import CommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_missing_page_path(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(GetCommentsRequest())

    @pytest.mark.asyncio
    async def test_listing_sorted_with_total(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("late", minutes=10))
        await comment_repo.save(make_comment("early", minutes=1))

        # Act
        result = await use_case.execute(GetCommentsRequest(page_path="/blog/post-1"))

        # Assert
        assert result.total == 2
        assert [c.id for c in result.comments] == ["early", "late"]
