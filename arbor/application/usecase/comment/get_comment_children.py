"""Get comment children use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService

from .common import CommentItem, parse_comment_id


class GetCommentChildrenRequest(BaseModel):
    """Get comment children request."""

    comment_id: str
    max_depth: int | None = None  # Levels below the parent, clamped to [1, 50]


class GetCommentChildrenResponse(BaseModel):
    """Descendants in path order, ready for flat rendering."""

    parent_id: str
    children: list[CommentItem]
    total: int


class GetCommentChildrenUseCase:
    """Use case for fetching the replies below a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment children use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(
        self, request: GetCommentChildrenRequest
    ) -> GetCommentChildrenResponse:
        """Execute get children flow.

        Raises:
            NotFoundError: If the parent is absent or deleted
        """
        children = await self.comment_service.get_comment_children(
            parse_comment_id(request.comment_id), max_depth=request.max_depth
        )
        items = [CommentItem.from_domain(c) for c in children]
        return GetCommentChildrenResponse(
            parent_id=request.comment_id, children=items, total=len(items)
        )
