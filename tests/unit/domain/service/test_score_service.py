"""Unit tests for vote tallying and ScoreService."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from arbor.domain.error import NotFoundError
from arbor.domain.model import Vote
from arbor.domain.repository import CommentRepository
from arbor.domain.service import ScoreService, tally_votes
from arbor.domain.value import CommentId, UserId, VoteId, VoteType
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _vote(vote_type: VoteType) -> Vote:
    now = datetime.now(timezone.utc)
    return Vote(
        id=VoteId(uuid4()),
        comment_id=CommentId(uuid4()),
        user_id=UserId(f"user-{uuid4().hex[:6]}"),
        vote_type=vote_type,
        created_at=now,
        updated_at=now,
    )


class TestTallyVotes:
    """Tests for tally_votes."""

    def test_empty_tally_is_zero(self):
        tally = tally_votes([])

        assert (tally.upvotes, tally.downvotes, tally.score) == (0, 0, 0)

    def test_score_is_up_minus_down(self):
        """Score is the difference between both directions."""
        votes = [_vote(VoteType.UP)] * 3 + [_vote(VoteType.DOWN)] * 5

        tally = tally_votes(votes)

        assert tally.upvotes == 3
        assert tally.downvotes == 5
        assert tally.score == -2


class TestScoreService:
    """Tests for ScoreService recomputation."""

    @pytest.mark.asyncio
    async def test_recompute_fixes_drifted_counters(self, unit_env):
        """Recompute restores counters from the stored votes."""
        # Arrange
        repo = await unit_env.get(CommentRepository)
        score_service = await unit_env.get(ScoreService)
        comment = await repo.create(make_comment(user_id="alice"))
        await repo.cast_vote(comment.id, UserId("bob"), VoteType.UP)
        await repo.cast_vote(comment.id, UserId("carol"), VoteType.UP)

        # Simulate drift
        repo._comments[comment.id] = repo._comments[comment.id].model_copy(
            update={"upvotes": 40, "score": 40}
        )

        # Act
        tally = await score_service.recompute(comment.id)

        # Assert
        assert tally.score == 2
        stored = await repo.get_by_id(comment.id)
        assert (stored.upvotes, stored.downvotes, stored.score) == (2, 0, 2)

    @pytest.mark.asyncio
    async def test_recompute_unknown_comment_raises(self, unit_env):
        score_service = await unit_env.get(ScoreService)

        with pytest.raises(NotFoundError):
            await score_service.recompute(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_recompute_many_skips_unknown_ids(self, unit_env):
        """Only existing comments are counted as updated."""
        # Arrange
        repo = await unit_env.get(CommentRepository)
        score_service = await unit_env.get(ScoreService)
        first = await repo.create(make_comment())
        second = await repo.create(make_comment())

        # Act
        updated = await score_service.recompute_many(
            [first.id, second.id, CommentId(uuid4())]
        )

        # Assert
        assert updated == 2

    @pytest.mark.asyncio
    async def test_recompute_all_includes_deleted_comments(self, unit_env):
        """Every stored row is recounted, tombstones included."""
        # Arrange
        repo = await unit_env.get(CommentRepository)
        score_service = await unit_env.get(ScoreService)
        live = await repo.create(make_comment(user_id="alice"))
        gone = await repo.create(make_comment(user_id="alice"))
        await repo.soft_delete(gone.id, UserId("alice"))

        # Act
        updated = await score_service.recompute_all()

        # Assert
        assert updated == 2
        assert (await repo.get_by_id(live.id)).score == 0
