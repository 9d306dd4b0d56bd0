"""Get comment use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService

from .common import CommentItem, parse_comment_id


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentItem


class GetCommentUseCase:
    """Use case for fetching a single live comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment is absent or deleted
        """
        comment = await self.comment_service.get_comment(
            parse_comment_id(request.comment_id)
        )
        return GetCommentResponse(comment=CommentItem.from_domain(comment))
