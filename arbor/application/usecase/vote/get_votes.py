"""Vote lookup use cases."""

from pydantic import BaseModel

from arbor.application.usecase.comment import parse_comment_id
from arbor.domain.service import CommentService
from arbor.domain.value import UserId

from .cast_vote import VoteItem


class GetUserVoteRequest(BaseModel):
    """Look up the caller's vote on a comment."""

    comment_id: str
    user_id: str


class GetUserVoteResponse(BaseModel):
    vote: VoteItem | None


class GetCommentVotesRequest(BaseModel):
    """List every vote on a comment."""

    comment_id: str


class GetCommentVotesResponse(BaseModel):
    comment_id: str
    votes: list[VoteItem]
    total: int


class GetUserVoteUseCase:
    """Use case for reading one user's vote on a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        vote = await self.comment_service.get_vote(
            parse_comment_id(request.comment_id), UserId(request.user_id)
        )
        return GetUserVoteResponse(vote=VoteItem.from_domain(vote) if vote else None)


class GetCommentVotesUseCase:
    """Use case for listing the votes cast on a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentVotesRequest) -> GetCommentVotesResponse:
        votes = await self.comment_service.get_comment_votes(
            parse_comment_id(request.comment_id)
        )
        return GetCommentVotesResponse(
            comment_id=request.comment_id,
            votes=[VoteItem.from_domain(v) for v in votes],
            total=len(votes),
        )
