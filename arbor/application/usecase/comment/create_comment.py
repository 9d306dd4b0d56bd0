"""Create comment use case."""

from pydantic import BaseModel, Field

from arbor.domain.service import CommentService
from arbor.domain.value import MAX_EXTERNAL_ID_LENGTH, RootId, UserId

from .common import CommentItem, parse_comment_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    root_id: str = Field(max_length=MAX_EXTERNAL_ID_LENGTH)
    user_id: str = Field(max_length=MAX_EXTERNAL_ID_LENGTH)  # Caller identity
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    media_url: str | None = None
    link_url: str | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for creating a top-level comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment with its path and depth

        Raises:
            InvalidArgumentError: If the input is malformed
            NotFoundError: If the parent does not exist
            CrossRootError: If the parent belongs to another root
            DepthExceededError: If the parent is at the maximum depth
        """
        parent_id = parse_comment_id(request.parent_id) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            root_id=RootId(request.root_id),
            user_id=UserId(request.user_id),
            content=request.content,
            parent_id=parent_id,
            media_url=request.media_url,
            link_url=request.link_url,
        )
        return CreateCommentResponse(comment=CommentItem.from_domain(comment))
