"""Search comments use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import RootId

from .common import CommentItem, ListOptions


class SearchCommentsRequest(BaseModel):
    """Search comments request."""

    root_id: str
    query: str
    options: ListOptions = ListOptions()


class SearchCommentsResponse(BaseModel):
    """Search comments response."""

    query: str
    comments: list[CommentItem]
    total: int


class SearchCommentsUseCase:
    """Use case for substring search within one page of a root's comments.

    Matching is case-insensitive and runs over the page selected by the
    listing options, not over the whole root.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize search comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        """Execute search flow.

        Raises:
            InvalidArgumentError: If the query is shorter than the minimum
        """
        comments = await self.comment_service.search_comments(
            RootId(request.root_id), request.query, request.options.to_filter()
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return SearchCommentsResponse(
            query=request.query.strip(), comments=items, total=len(items)
        )
