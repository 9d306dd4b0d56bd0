"""Get top comments use case."""

from pydantic import BaseModel

from arbor.application.usecase.comment import CommentItem
from arbor.domain.service import CommentService
from arbor.domain.value import RootId


class GetTopCommentsRequest(BaseModel):
    """Get top comments request."""

    root_id: str
    limit: int | None = None  # Default 10, at most 100
    time_range: str | None = None  # hour, day, week, month or all; default day


class GetTopCommentsResponse(BaseModel):
    """Get top comments response."""

    root_id: str
    comments: list[CommentItem]
    total: int


class GetTopCommentsUseCase:
    """Use case for the highest scoring comments of a root in a time window.

    Ties on score go to the more recent comment.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetTopCommentsRequest) -> GetTopCommentsResponse:
        comments = await self.comment_service.get_top_comments(
            RootId(request.root_id),
            limit=request.limit,
            time_range=request.time_range,
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return GetTopCommentsResponse(
            root_id=request.root_id, comments=items, total=len(items)
        )
