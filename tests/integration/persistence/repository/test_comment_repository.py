"""Integration tests for PostgresCommentRepository.

These run against the database at DATABASE__URL with migrations applied
(``python scripts/run_migrations.py``). Set ARBOR_TEST_POSTGRES=1 to enable.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from arbor.domain.error import CrossRootError, NotFoundError
from arbor.domain.model import BatchVote, CommentFilter, CommentUpdate
from arbor.domain.model.common import utc_now
from arbor.domain.repository import CommentRepository
from arbor.domain.service import CommentService
from arbor.domain.value import CommentId, VoteType
from arbor.persistence.tables import comments_table
from tests.conftest import make_comment
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    os.environ.get("ARBOR_TEST_POSTGRES") != "1",
    reason="PostgreSQL integration tests disabled",
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestCommentRepositoryIntegration:
    """Integration tests for the PostgreSQL comment store."""

    @pytest.mark.asyncio
    async def test_create_derives_path_and_depth(self, integration_env, root_id):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        top = await repo.create(make_comment(root_id=root_id, content="top"))

        # Act
        reply = await repo.create(
            make_comment(root_id=root_id, content="reply", parent_id=top.id)
        )

        # Assert
        assert reply.depth == 1
        assert reply.path == f"{top.id}.{reply.id}"
        path = await repo.find_path(reply.id)
        assert [c.id for c in path] == [top.id, reply.id]

    @pytest.mark.asyncio
    async def test_reply_to_other_root_rejected(self, integration_env, root_id):
        repo = await integration_env.get(CommentRepository)
        top = await repo.create(make_comment(root_id=root_id))

        with pytest.raises(CrossRootError):
            await repo.create(
                make_comment(root_id=f"{root_id}-other", parent_id=top.id)
            )

    @pytest.mark.asyncio
    async def test_votes_keep_counters_consistent(self, integration_env, root_id):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        comment = await repo.create(make_comment(root_id=root_id))

        # Act
        await repo.cast_vote(comment.id, "bob", VoteType.UP)
        await repo.cast_vote(comment.id, "carol", VoteType.UP)
        await repo.cast_vote(comment.id, "bob", VoteType.DOWN)
        stored = await repo.get_by_id(comment.id)

        # Assert
        assert (stored.upvotes, stored.downvotes, stored.score) == (1, 1, 0)
        assert len(await repo.find_votes(comment.id)) == 2

    @pytest.mark.asyncio
    async def test_soft_deleted_comment_hidden(self, integration_env, root_id):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        comment = await repo.create(make_comment(root_id=root_id))

        # Act
        await repo.soft_delete(comment.id, comment.user_id)

        # Assert
        with pytest.raises(NotFoundError):
            await repo.get_by_id(comment.id)
        assert await repo.find_comments(CommentFilter(root_id=root_id)) == []

    @pytest.mark.asyncio
    async def test_children_bounded_by_depth_in_path_order(
        self, integration_env, root_id
    ):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        top = await repo.create(make_comment(root_id=root_id))
        first = await repo.create(make_comment(root_id=root_id, parent_id=top.id))
        nested = await repo.create(make_comment(root_id=root_id, parent_id=first.id))
        await repo.create(make_comment(root_id=root_id, parent_id=nested.id))
        removed = await repo.create(make_comment(root_id=root_id, parent_id=top.id))
        await repo.soft_delete(removed.id, removed.user_id)
        sibling = await repo.create(make_comment(root_id=root_id))

        # Act
        children = await repo.find_children(top.id, max_depth=2)

        # Assert
        assert [c.id for c in children] == [first.id, nested.id]
        assert sibling.id not in {c.id for c in children}

    @pytest.mark.asyncio
    async def test_stats_skip_tombstones_and_count_edits(
        self, integration_env, root_id
    ):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        top = await repo.create(make_comment(root_id=root_id))
        reply = await repo.create(make_comment(root_id=root_id, parent_id=top.id))
        deep = await repo.create(make_comment(root_id=root_id, parent_id=reply.id))
        await repo.update(reply.id, CommentUpdate(content="edited once"))
        await repo.update(reply.id, CommentUpdate(content="edited twice"))
        await repo.cast_vote(top.id, "bob", VoteType.UP)
        await repo.soft_delete(deep.id, deep.user_id)

        # Act
        stats = await repo.get_stats(root_id)

        # Assert
        assert stats.total_count == 2
        assert stats.total_score == 1
        assert stats.max_depth == 1
        assert stats.recent_count == 2
        assert stats.edited_count == 1
        assert stats.total_edits == 2
        assert stats.edit_rate == 50.0
        assert stats.avg_edits_per_comment == 2.0

    @pytest.mark.asyncio
    async def test_purge_removes_deleted_threads_leaf_first(
        self, integration_env, root_id
    ):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        session = await integration_env.get(AsyncSession)
        parent = await repo.create(make_comment(root_id=root_id))
        reply = await repo.create(make_comment(root_id=root_id, parent_id=parent.id))
        tombstone = await repo.create(make_comment(root_id=root_id))
        live_child = await repo.create(
            make_comment(root_id=root_id, parent_id=tombstone.id)
        )
        for comment in (reply, parent, tombstone):
            await repo.soft_delete(comment.id, comment.user_id)
        await session.execute(
            update(comments_table)
            .where(comments_table.c.root_id == root_id)
            .values(updated_at=utc_now() - timedelta(days=4000))
        )

        # Act
        purged = await repo.purge_deleted(3650)

        # Assert
        assert purged >= 2
        for gone in (parent.id, reply.id):
            with pytest.raises(NotFoundError):
                await repo.get_by_id(gone)
        assert (await repo.get_by_id(live_child.id)).parent_id == tombstone.id
        path = await repo.find_path(live_child.id)
        assert [c.id for c in path] == [tombstone.id, live_child.id]

    @pytest.mark.asyncio
    async def test_recompute_repairs_drifted_counters(
        self, integration_env, root_id
    ):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        session = await integration_env.get(AsyncSession)
        liked = await repo.create(make_comment(root_id=root_id))
        disliked = await repo.create(make_comment(root_id=root_id))
        await repo.cast_vote(liked.id, "bob", VoteType.UP)
        await repo.cast_vote(liked.id, "carol", VoteType.UP)
        await repo.cast_vote(disliked.id, "bob", VoteType.DOWN)
        await session.execute(
            update(comments_table)
            .where(comments_table.c.root_id == root_id)
            .values(upvotes=40, downvotes=7, score=33)
        )

        # Act
        selected = await repo.recompute_scores([liked.id])
        everything = await repo.recompute_all_scores()

        # Assert
        assert selected == 1
        assert everything >= 2
        stored_liked = await repo.get_by_id(liked.id)
        stored_disliked = await repo.get_by_id(disliked.id)
        assert (stored_liked.upvotes, stored_liked.downvotes, stored_liked.score) == (
            2,
            0,
            2,
        )
        assert (
            stored_disliked.upvotes,
            stored_disliked.downvotes,
            stored_disliked.score,
        ) == (0, 1, -1)


class TestBatchVoteIntegration:
    """Batch votes against the PostgreSQL store."""

    @pytest.mark.asyncio
    async def test_failed_batch_rolls_back_earlier_votes(
        self, integration_env, root_id
    ):
        # Arrange
        service = await integration_env.get(CommentService)
        repo = await integration_env.get(CommentRepository)
        comment = await repo.create(make_comment(root_id=root_id))
        batch = [
            BatchVote(comment_id=comment.id, user_id="bob", vote_type=VoteType.UP),
            BatchVote(
                comment_id=CommentId(uuid4()), user_id="bob", vote_type=VoteType.UP
            ),
        ]

        # Act
        with pytest.raises(NotFoundError):
            await service.batch_vote_comments(batch, "bob")

        # Assert
        assert await repo.find_vote(comment.id, "bob") is None
        stored = await repo.get_by_id(comment.id)
        assert (stored.upvotes, stored.score) == (0, 0)
