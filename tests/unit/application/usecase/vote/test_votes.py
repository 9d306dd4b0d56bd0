"""Unit tests for vote use cases."""

import pytest

from arbor.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from arbor.application.usecase.vote import (
    BatchVoteItem,
    BatchVoteRequest,
    BatchVoteUseCase,
    CastVoteRequest,
    CastVoteUseCase,
    GetCommentVotesRequest,
    GetCommentVotesUseCase,
    GetUserVoteRequest,
    GetUserVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
)
from arbor.domain.error import ForbiddenError, InvalidArgumentError, NotFoundError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create(unit_env, user_id: str = "author") -> str:
    create_comment_use_case = await unit_env.get(CreateCommentUseCase)
    response = await create_comment_use_case.execute(
        CreateCommentRequest(root_id="r1", user_id=user_id, content="vote here")
    )
    return response.comment.comment_id


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_response_carries_recomputed_counters(self, unit_env):
        # Arrange
        comment_id = await _create(unit_env)
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=comment_id, user_id="u1", vote_type=1)
        )

        # Act
        response = await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=comment_id, user_id="u2", vote_type=-1)
        )

        # Assert
        assert response.vote.vote_type == -1
        assert (response.upvotes, response.downvotes, response.score) == (1, 1, 0)

    @pytest.mark.asyncio
    async def test_self_vote_forbidden(self, unit_env):
        comment_id = await _create(unit_env, user_id="u1")
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(ForbiddenError):
            await cast_vote_use_case.execute(
                CastVoteRequest(comment_id=comment_id, user_id="u1", vote_type=1)
            )


class TestRemoveVoteUseCase:
    """Tests for RemoveVoteUseCase."""

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(self, unit_env):
        """Removing twice succeeds both times."""
        # Arrange
        comment_id = await _create(unit_env)
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        remove_vote_use_case = await unit_env.get(RemoveVoteUseCase)
        await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=comment_id, user_id="u1", vote_type=1)
        )
        request = RemoveVoteRequest(comment_id=comment_id, user_id="u1")

        # Act
        first = await remove_vote_use_case.execute(request)
        second = await remove_vote_use_case.execute(request)

        # Assert
        assert first.success and first.message == "Vote removed"
        assert second.success and second.message == "No vote to remove"


class TestVoteReads:
    """Tests for vote lookups."""

    @pytest.mark.asyncio
    async def test_user_vote_and_comment_votes(self, unit_env):
        # Arrange
        comment_id = await _create(unit_env)
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        for voter in ("u1", "u2"):
            await cast_vote_use_case.execute(
                CastVoteRequest(comment_id=comment_id, user_id=voter, vote_type=1)
            )
        get_user_vote = await unit_env.get(GetUserVoteUseCase)
        get_comment_votes = await unit_env.get(GetCommentVotesUseCase)

        # Act
        mine = await get_user_vote.execute(
            GetUserVoteRequest(comment_id=comment_id, user_id="u1")
        )
        nobody = await get_user_vote.execute(
            GetUserVoteRequest(comment_id=comment_id, user_id="u3")
        )
        everyone = await get_comment_votes.execute(
            GetCommentVotesRequest(comment_id=comment_id)
        )

        # Assert
        assert mine.vote is not None and mine.vote.user_id == "u1"
        assert nobody.vote is None
        assert everyone.total == 2


class TestBatchVoteUseCase:
    """Tests for BatchVoteUseCase."""

    @pytest.mark.asyncio
    async def test_batch_applies_each_item_to_its_own_comment(self, unit_env):
        # Arrange
        first = await _create(unit_env)
        second = await _create(unit_env)
        batch_vote_use_case = await unit_env.get(BatchVoteUseCase)

        # Act
        response = await batch_vote_use_case.execute(
            BatchVoteRequest(
                user_id="u1",
                votes=[
                    BatchVoteItem(comment_id=first, user_id="u1", vote_type=1),
                    BatchVoteItem(comment_id=second, user_id="u1", vote_type=-1),
                ],
            )
        )

        # Assert
        assert response.total == 2
        assert {(v.comment_id, v.vote_type) for v in response.votes} == {
            (first, 1),
            (second, -1),
        }

    @pytest.mark.asyncio
    async def test_invalid_item_rejected(self, unit_env):
        first = await _create(unit_env)
        batch_vote_use_case = await unit_env.get(BatchVoteUseCase)

        with pytest.raises(InvalidArgumentError):
            await batch_vote_use_case.execute(
                BatchVoteRequest(
                    user_id="u1",
                    votes=[BatchVoteItem(comment_id=first, user_id="u1", vote_type=3)],
                )
            )

    @pytest.mark.asyncio
    async def test_missing_comment_rolls_back_batch(self, unit_env):
        # Arrange
        first = await _create(unit_env)
        batch_vote_use_case = await unit_env.get(BatchVoteUseCase)
        get_user_vote = await unit_env.get(GetUserVoteUseCase)

        # Act
        with pytest.raises(NotFoundError):
            await batch_vote_use_case.execute(
                BatchVoteRequest(
                    user_id="u1",
                    votes=[
                        BatchVoteItem(comment_id=first, user_id="u1", vote_type=1),
                        BatchVoteItem(
                            comment_id="0b9d7a2e-3c41-4f6a-8e5d-1a2b3c4d5e6f",
                            user_id="u1",
                            vote_type=1,
                        ),
                    ],
                )
            )

        # Assert
        response = await get_user_vote.execute(
            GetUserVoteRequest(comment_id=first, user_id="u1")
        )
        assert response.vote is None
