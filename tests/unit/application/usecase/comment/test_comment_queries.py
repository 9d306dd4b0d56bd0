"""Unit tests for comment listing, tree, path, children and search use cases."""

import pytest

from arbor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentChildrenRequest,
    GetCommentChildrenUseCase,
    GetCommentPathRequest,
    GetCommentPathUseCase,
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
    ListCommentsWithVotesRequest,
    ListCommentsWithVotesUseCase,
    ListOptions,
    ListRootCommentsRequest,
    ListRootCommentsUseCase,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
    SearchCommentsRequest,
    SearchCommentsUseCase,
)
from arbor.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from arbor.domain.error import InvalidArgumentError
from arbor.domain.value import SortField, SortOrder
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create(
    unit_env, content: str, parent_id: str | None = None, user_id: str = "u1"
) -> str:
    create_comment_use_case = await unit_env.get(CreateCommentUseCase)
    response = await create_comment_use_case.execute(
        CreateCommentRequest(
            root_id="r1", user_id=user_id, content=content, parent_id=parent_id
        )
    )
    return response.comment.comment_id


class TestListUseCases:
    """Tests for root and user listings."""

    @pytest.mark.asyncio
    async def test_root_listing_pages_in_requested_order(self, unit_env):
        # Arrange
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        for index, vote_type in enumerate([-1, None, 1]):
            comment_id = await _create(unit_env, f"comment {index}")
            if vote_type is not None:
                await cast_vote_use_case.execute(
                    CastVoteRequest(
                        comment_id=comment_id, user_id="u2", vote_type=vote_type
                    )
                )
        list_use_case = await unit_env.get(ListRootCommentsUseCase)

        # Act
        response = await list_use_case.execute(
            ListRootCommentsRequest(
                root_id="r1",
                options=ListOptions(
                    sort_by=SortField.SCORE, sort_order=SortOrder.ASC, limit=2
                ),
            )
        )

        # Assert
        assert response.total == 2
        assert [c.content for c in response.comments] == ["comment 0", "comment 1"]

    @pytest.mark.asyncio
    async def test_bad_parent_filter_is_invalid_argument(self, unit_env):
        list_use_case = await unit_env.get(ListRootCommentsUseCase)

        with pytest.raises(InvalidArgumentError):
            await list_use_case.execute(
                ListRootCommentsRequest(
                    root_id="r1", options=ListOptions(parent_id="not-a-uuid")
                )
            )

    @pytest.mark.asyncio
    async def test_user_listing_filters_by_author(self, unit_env):
        await _create(unit_env, "mine", user_id="u9")
        await _create(unit_env, "theirs", user_id="u1")
        list_use_case = await unit_env.get(ListUserCommentsUseCase)

        response = await list_use_case.execute(ListUserCommentsRequest(user_id="u9"))

        assert [c.content for c in response.comments] == ["mine"]

    @pytest.mark.asyncio
    async def test_listing_with_votes_maps_ids_to_vote_type(self, unit_env):
        # Arrange
        comment_id = await _create(unit_env, "vote on me")
        await _create(unit_env, "leave me alone")
        cast_vote_use_case = await unit_env.get(CastVoteUseCase)
        await cast_vote_use_case.execute(
            CastVoteRequest(comment_id=comment_id, user_id="u2", vote_type=1)
        )
        list_use_case = await unit_env.get(ListCommentsWithVotesUseCase)

        # Act
        response = await list_use_case.execute(
            ListCommentsWithVotesRequest(root_id="r1", user_id="u2")
        )

        # Assert
        assert response.total == 2
        assert response.user_votes == {comment_id: 1}


class TestTreeAndPath:
    """Tests for tree, path and children use cases."""

    @pytest.mark.asyncio
    async def test_tree_nests_replies(self, unit_env):
        # Arrange
        top = await _create(unit_env, "top")
        reply = await _create(unit_env, "reply", parent_id=top)
        await _create(unit_env, "nested", parent_id=reply)
        tree_use_case = await unit_env.get(GetCommentTreeUseCase)

        # Act
        response = await tree_use_case.execute(GetCommentTreeRequest(root_id="r1"))

        # Assert
        assert response.total_comments == 3
        assert len(response.roots) == 1
        child = response.roots[0].children[0]
        assert child.comment.comment_id == reply
        assert child.children[0].comment.content == "nested"

    @pytest.mark.asyncio
    async def test_path_withholds_deleted_ancestor_content(self, unit_env):
        """Deleted ancestors stay in the chain with their content hidden."""
        # Arrange
        top = await _create(unit_env, "secret")
        reply = await _create(unit_env, "reply", parent_id=top, user_id="u2")
        delete_use_case = await unit_env.get(DeleteCommentUseCase)
        await delete_use_case.execute(DeleteCommentRequest(comment_id=top, user_id="u1"))
        path_use_case = await unit_env.get(GetCommentPathUseCase)

        # Act
        response = await path_use_case.execute(GetCommentPathRequest(comment_id=reply))

        # Assert
        assert [c.comment_id for c in response.path] == [top, reply]
        assert response.path[0].is_deleted is True
        assert response.path[0].content is None
        assert response.path[1].content == "reply"

    @pytest.mark.asyncio
    async def test_children_limited_by_depth(self, unit_env):
        top = await _create(unit_env, "top")
        reply = await _create(unit_env, "reply", parent_id=top)
        await _create(unit_env, "nested", parent_id=reply)
        children_use_case = await unit_env.get(GetCommentChildrenUseCase)

        response = await children_use_case.execute(
            GetCommentChildrenRequest(comment_id=top, max_depth=1)
        )

        assert response.total == 1
        assert response.children[0].comment_id == reply


class TestSearchCommentsUseCase:
    """Tests for SearchCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_search_returns_matches_only(self, unit_env):
        await _create(unit_env, "Tree structures are neat")
        await _create(unit_env, "Something else")
        search_use_case = await unit_env.get(SearchCommentsUseCase)

        response = await search_use_case.execute(
            SearchCommentsRequest(root_id="r1", query="tree")
        )

        assert response.total == 1
        assert response.comments[0].content == "Tree structures are neat"
