"""Remove vote use case."""

from pydantic import BaseModel

from arbor.application.usecase.comment import parse_comment_id
from arbor.domain.service import CommentService
from arbor.domain.value import UserId


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    comment_id: str
    user_id: str  # Caller identity from the transport


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    success: bool
    message: str


class RemoveVoteUseCase:
    """Use case for withdrawing a vote from a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize remove vote use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow.

        Removing a vote that does not exist is not an error.

        Args:
            request: Remove vote request

        Returns:
            Remove vote response
        """
        removed = await self.comment_service.remove_vote(
            parse_comment_id(request.comment_id), UserId(request.user_id)
        )

        if removed:
            return RemoveVoteResponse(success=True, message="Vote removed")
        return RemoveVoteResponse(success=True, message="No vote to remove")
