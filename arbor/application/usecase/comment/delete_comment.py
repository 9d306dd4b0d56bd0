"""Delete comment use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import UserId

from .common import parse_comment_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # Caller identity from the transport


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool
    message: str


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment.

    The comment stays in its replies' ancestor chains but disappears from
    listings, trees and stats.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        await self.comment_service.delete_comment(
            comment_id=parse_comment_id(request.comment_id),
            user_id=UserId(request.user_id),
        )
        return DeleteCommentResponse(success=True, message="Comment deleted")
