"""Batch vote use case."""

from pydantic import BaseModel, Field, ValidationError

from arbor.application.usecase.comment import parse_comment_id
from arbor.domain.error import InvalidArgumentError
from arbor.domain.model import BatchVote
from arbor.domain.service import CommentService
from arbor.domain.value import MAX_EXTERNAL_ID_LENGTH, UserId

from .cast_vote import VoteItem


class BatchVoteItem(BaseModel):
    """One vote in a batch."""

    comment_id: str
    user_id: str = Field(max_length=MAX_EXTERNAL_ID_LENGTH)
    vote_type: int


class BatchVoteRequest(BaseModel):
    """Batch vote request."""

    user_id: str  # Caller identity from the transport
    votes: list[BatchVoteItem]


class BatchVoteResponse(BaseModel):
    """Batch vote response."""

    votes: list[VoteItem]
    total: int


class BatchVoteUseCase:
    """Use case for applying many votes at once, all or nothing."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize batch vote use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: BatchVoteRequest) -> BatchVoteResponse:
        """Execute batch vote flow.

        Raises:
            InvalidArgumentError: If an item is malformed, the batch is too
                large, or an item belongs to another user
            NotFoundError: If a target comment does not exist
            ForbiddenError: If an item targets the caller's own comment
        """
        votes: list[BatchVote] = []
        for item in request.votes:
            vote_type = self.comment_service.parse_vote_type(item.vote_type)
            try:
                votes.append(
                    BatchVote(
                        comment_id=parse_comment_id(item.comment_id),
                        user_id=UserId(item.user_id),
                        vote_type=vote_type,
                    )
                )
            except ValidationError as e:
                raise InvalidArgumentError(f"Invalid batch vote: {e}")

        applied = await self.comment_service.batch_vote_comments(
            votes, UserId(request.user_id)
        )
        return BatchVoteResponse(
            votes=[VoteItem.from_domain(v) for v in applied], total=len(applied)
        )
