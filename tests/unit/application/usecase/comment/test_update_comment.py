"""Unit tests for UpdateCommentUseCase and DeleteCommentUseCase."""

import pytest

from arbor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from arbor.domain.error import NotAuthorizedError, NotFoundError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create(unit_env, content: str = "original") -> str:
    create_comment_use_case = await unit_env.get(CreateCommentUseCase)
    response = await create_comment_use_case.execute(
        CreateCommentRequest(root_id="r1", user_id="u1", content=content)
    )
    return response.comment.comment_id


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_edit_tracking_in_response(self, unit_env):
        """Two edits: count is 2, original content is the first text."""
        # Arrange
        comment_id = await _create(unit_env)
        update_comment_use_case = await unit_env.get(UpdateCommentUseCase)

        # Act
        await update_comment_use_case.execute(
            UpdateCommentRequest(comment_id=comment_id, user_id="u1", content="second")
        )
        response = await update_comment_use_case.execute(
            UpdateCommentRequest(comment_id=comment_id, user_id="u1", content="third")
        )

        # Assert
        comment = response.comment
        assert comment.content == "third"
        assert comment.is_edited is True
        assert comment.edit_count == 2
        assert comment.original_content == "original"
        assert comment.content_updated_at is not None

    @pytest.mark.asyncio
    async def test_non_author_rejected(self, unit_env):
        comment_id = await _create(unit_env)
        update_comment_use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await update_comment_use_case.execute(
                UpdateCommentRequest(comment_id=comment_id, user_id="u2", content="x")
            )


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_deleted_comment_no_longer_found(self, unit_env):
        # Arrange
        comment_id = await _create(unit_env)
        delete_comment_use_case = await unit_env.get(DeleteCommentUseCase)
        get_comment_use_case = await unit_env.get(GetCommentUseCase)

        # Act
        response = await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id="u1")
        )

        # Assert
        assert response.success is True
        with pytest.raises(NotFoundError):
            await get_comment_use_case.execute(GetCommentRequest(comment_id=comment_id))
