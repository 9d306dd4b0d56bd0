"""Update comment use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import UserId

from .common import CommentItem, parse_comment_id


class UpdateCommentRequest(BaseModel):
    """Update comment request.

    Fields left as None are not changed; an empty URL clears it.
    """

    comment_id: str
    user_id: str  # Caller identity from the transport
    content: str | None = None
    media_url: str | None = None
    link_url: str | None = None


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's content or URLs."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Only the author may edit. Edit tracking (edit count, original
        content) is maintained by the domain.

        Raises:
            InvalidArgumentError: If a provided value is malformed
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is not the author
        """
        comment = await self.comment_service.update_comment(
            comment_id=parse_comment_id(request.comment_id),
            user_id=UserId(request.user_id),
            content=request.content,
            media_url=request.media_url,
            link_url=request.link_url,
        )
        return UpdateCommentResponse(comment=CommentItem.from_domain(comment))
