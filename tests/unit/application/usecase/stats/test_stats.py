"""Unit tests for statistics use cases."""

import pytest

from arbor.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from arbor.application.usecase.stats import (
    GetStatsRequest,
    GetStatsUseCase,
    GetTopCommentsRequest,
    GetTopCommentsUseCase,
    GetUserCommentCountRequest,
    GetUserCommentCountUseCase,
)
from arbor.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create(unit_env, content: str, user_id: str = "u1") -> str:
    create_comment_use_case = await unit_env.get(CreateCommentUseCase)
    response = await create_comment_use_case.execute(
        CreateCommentRequest(root_id="r1", user_id=user_id, content=content)
    )
    return response.comment.comment_id


class TestGetStatsUseCase:
    """Tests for GetStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats_for_root(self, unit_env):
        # Arrange
        comment_id = await _create(unit_env, "one")
        await _create(unit_env, "two")
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=comment_id, user_id="u2", vote_type=1)
        )
        get_stats_use_case = await unit_env.get(GetStatsUseCase)

        # Act
        response = await get_stats_use_case.execute(GetStatsRequest(root_id="r1"))

        # Assert
        assert response.root_id == "r1"
        assert response.total_count == 2
        assert response.total_score == 1
        assert response.recent_count == 2
        assert response.edit_rate == 0.0


class TestGetTopCommentsUseCase:
    """Tests for GetTopCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_top_comments_ranked_by_score(self, unit_env):
        # Arrange
        low = await _create(unit_env, "low")
        high = await _create(unit_env, "high")
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=high, user_id="u2", vote_type=1)
        )
        top_use_case = await unit_env.get(GetTopCommentsUseCase)

        # Act
        response = await top_use_case.execute(
            GetTopCommentsRequest(root_id="r1", limit=1, time_range="week")
        )

        # Assert
        assert response.total == 1
        assert response.comments[0].comment_id == high
        assert low != high


class TestGetUserCommentCountUseCase:
    """Tests for GetUserCommentCountUseCase."""

    @pytest.mark.asyncio
    async def test_count_ignores_other_users(self, unit_env):
        await _create(unit_env, "a", user_id="u7")
        await _create(unit_env, "b", user_id="u7")
        await _create(unit_env, "c", user_id="u8")
        count_use_case = await unit_env.get(GetUserCommentCountUseCase)

        response = await count_use_case.execute(GetUserCommentCountRequest(user_id="u7"))

        assert response.count == 2
