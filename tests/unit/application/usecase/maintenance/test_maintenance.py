"""Unit tests for maintenance use cases."""

from datetime import timedelta

import pytest

from arbor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    parse_comment_id,
)
from arbor.application.usecase.maintenance import (
    PurgeDeletedRequest,
    PurgeDeletedUseCase,
    RecalculateScoresRequest,
    RecalculateScoresUseCase,
)
from arbor.domain.error import InvalidArgumentError
from arbor.domain.model.common import utc_now
from arbor.domain.repository import CommentRepository
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create(unit_env) -> str:
    create_comment_use_case = await unit_env.get(CreateCommentUseCase)
    response = await create_comment_use_case.execute(
        CreateCommentRequest(root_id="r1", user_id="u1", content="to be removed")
    )
    return response.comment.comment_id


class TestPurgeDeletedUseCase:
    """Tests for PurgeDeletedUseCase."""

    @pytest.mark.asyncio
    async def test_purges_only_expired_tombstones(self, unit_env):
        # Arrange
        expired = await _create(unit_env)
        fresh = await _create(unit_env)
        delete_use_case = await unit_env.get(DeleteCommentUseCase)
        for comment_id in (expired, fresh):
            await delete_use_case.execute(
                DeleteCommentRequest(comment_id=comment_id, user_id="u1")
            )

        repo = await unit_env.get(CommentRepository)
        key = parse_comment_id(expired)
        repo._comments[key] = repo._comments[key].model_copy(
            update={"updated_at": utc_now() - timedelta(days=8)}
        )
        purge_use_case = await unit_env.get(PurgeDeletedUseCase)

        # Act
        response = await purge_use_case.execute(PurgeDeletedRequest(older_than_days=7))

        # Assert
        assert response.purged == 1
        assert response.older_than_days == 7

    @pytest.mark.asyncio
    async def test_zero_days_rejected(self, unit_env):
        purge_use_case = await unit_env.get(PurgeDeletedUseCase)

        with pytest.raises(InvalidArgumentError):
            await purge_use_case.execute(PurgeDeletedRequest(older_than_days=0))


class TestRecalculateScoresUseCase:
    """Tests for RecalculateScoresUseCase."""

    @pytest.mark.asyncio
    async def test_recalculate_all_and_selected(self, unit_env):
        first = await _create(unit_env)
        await _create(unit_env)
        recalc_use_case = await unit_env.get(RecalculateScoresUseCase)

        everything = await recalc_use_case.execute(RecalculateScoresRequest())
        selected = await recalc_use_case.execute(
            RecalculateScoresRequest(comment_ids=[first])
        )

        assert everything.updated == 2
        assert selected.updated == 1

    @pytest.mark.asyncio
    async def test_malformed_id_rejected(self, unit_env):
        recalc_use_case = await unit_env.get(RecalculateScoresUseCase)

        with pytest.raises(InvalidArgumentError):
            await recalc_use_case.execute(
                RecalculateScoresRequest(comment_ids=["nope"])
            )
