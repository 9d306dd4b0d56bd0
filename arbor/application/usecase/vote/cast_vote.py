"""Cast vote use case."""

from datetime import datetime

from pydantic import BaseModel

from arbor.application.usecase.comment import parse_comment_id
from arbor.domain.model import Vote
from arbor.domain.service import CommentService
from arbor.domain.value import UserId


class VoteItem(BaseModel):
    """Vote item in response."""

    vote_id: str
    comment_id: str
    user_id: str
    vote_type: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, vote: Vote) -> "VoteItem":
        return cls(
            vote_id=str(vote.id),
            comment_id=str(vote.comment_id),
            user_id=vote.user_id,
            vote_type=int(vote.vote_type),
            created_at=vote.created_at,
            updated_at=vote.updated_at,
        )


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    comment_id: str
    user_id: str  # Caller identity from the transport
    vote_type: int  # 1 for up, -1 for down


class CastVoteResponse(BaseModel):
    """Cast vote response with the comment's fresh tally."""

    vote: VoteItem
    upvotes: int
    downvotes: int
    score: int


class CastVoteUseCase:
    """Use case for voting a comment up or down.

    Voting again replaces the caller's previous vote on the same comment.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize cast vote use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Steps:
        1. Cast the vote (service rejects invalid types and self-votes)
        2. Re-read the comment for its recomputed counters

        Raises:
            InvalidArgumentError: If the vote type is not 1 or -1
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller wrote the comment
        """
        comment_id = parse_comment_id(request.comment_id)
        vote = await self.comment_service.vote_comment(
            comment_id, UserId(request.user_id), request.vote_type
        )
        comment = await self.comment_service.get_comment(comment_id)
        return CastVoteResponse(
            vote=VoteItem.from_domain(vote),
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            score=comment.score,
        )
