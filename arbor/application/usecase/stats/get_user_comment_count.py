"""Get user comment count use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import UserId


class GetUserCommentCountRequest(BaseModel):
    """Get user comment count request."""

    user_id: str


class GetUserCommentCountResponse(BaseModel):
    """Number of live comments by the user across all roots."""

    user_id: str
    count: int


class GetUserCommentCountUseCase:
    """Use case for counting a user's comments."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: GetUserCommentCountRequest
    ) -> GetUserCommentCountResponse:
        count = await self.comment_service.get_user_comment_count(
            UserId(request.user_id)
        )
        return GetUserCommentCountResponse(user_id=request.user_id, count=count)
