"""Vote score aggregation.

A comment's counters are always derived from its stored votes:
``upvotes`` and ``downvotes`` are the number of votes of each direction and
``score = upvotes - downvotes``. Repositories recompute them inside the same
transaction as every vote write; the routines here also serve maintenance
and backfills.
"""

from collections.abc import Iterable

import logfire

from arbor.domain.model import Vote
from arbor.domain.repository import CommentRepository
from arbor.domain.value import CommentId, VoteTally, VoteType

from .base import Service


def tally_votes(votes: Iterable[Vote]) -> VoteTally:
    """Count the votes of each direction."""
    upvotes = downvotes = 0
    for vote in votes:
        if vote.vote_type == VoteType.UP:
            upvotes += 1
        else:
            downvotes += 1
    return VoteTally(upvotes=upvotes, downvotes=downvotes)


class ScoreService(Service):
    """Domain service recomputing vote tallies."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize score service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def recompute(self, comment_id: CommentId) -> VoteTally:
        """Recount one comment's votes and store the result.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("score_service.recompute", comment_id=str(comment_id)):
            tally = await self.comment_repository.recompute_score(comment_id)
            logfire.info(
                "Score recomputed",
                comment_id=str(comment_id),
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
                score=tally.score,
            )
            return tally

    async def recompute_many(self, comment_ids: list[CommentId]) -> int:
        """Recount several comments, each in its own atomic step."""
        with logfire.span("score_service.recompute_many", count=len(comment_ids)):
            updated = await self.comment_repository.recompute_scores(comment_ids)
            logfire.info("Scores recomputed", requested=len(comment_ids), updated=updated)
            return updated

    async def recompute_all(self) -> int:
        """Recount every stored comment."""
        with logfire.span("score_service.recompute_all"):
            updated = await self.comment_repository.recompute_all_scores()
            logfire.info("All scores recomputed", updated=updated)
            return updated
