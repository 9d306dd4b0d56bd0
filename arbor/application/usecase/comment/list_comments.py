"""Comment listing use cases."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import RootId, UserId

from .common import CommentItem, ListOptions


class ListRootCommentsRequest(BaseModel):
    """List comments of a root."""

    root_id: str
    options: ListOptions = ListOptions()


class ListUserCommentsRequest(BaseModel):
    """List comments written by a user."""

    user_id: str
    options: ListOptions = ListOptions()


class ListCommentsWithVotesRequest(BaseModel):
    """List comments of a root along with the caller's votes."""

    root_id: str
    user_id: str  # Caller identity from the transport
    options: ListOptions = ListOptions()


class ListCommentsResponse(BaseModel):
    """Comment listing response."""

    comments: list[CommentItem]
    total: int


class ListCommentsWithVotesResponse(ListCommentsResponse):
    """Comment listing plus the caller's vote per comment (+1 or -1)."""

    user_votes: dict[str, int]


class ListRootCommentsUseCase:
    """Use case for paging through a root's comments."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list root comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListRootCommentsRequest) -> ListCommentsResponse:
        """Execute the listing.

        Page size defaults to 50 and is capped at 1000 by the service.
        """
        comments = await self.comment_service.get_comments_by_root(
            RootId(request.root_id), request.options.to_filter()
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return ListCommentsResponse(comments=items, total=len(items))


class ListUserCommentsUseCase:
    """Use case for paging through a user's comments across roots."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListUserCommentsRequest) -> ListCommentsResponse:
        comments = await self.comment_service.get_comments_by_user(
            UserId(request.user_id), request.options.to_filter()
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return ListCommentsResponse(comments=items, total=len(items))


class ListCommentsWithVotesUseCase:
    """Use case for listing a root's comments with the caller's vote state.

    Lets a client render vote buttons for a page in one round trip.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ListCommentsWithVotesRequest
    ) -> ListCommentsWithVotesResponse:
        comments, votes = await self.comment_service.get_comments_with_user_votes(
            RootId(request.root_id),
            UserId(request.user_id),
            request.options.to_filter(),
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return ListCommentsWithVotesResponse(
            comments=items,
            total=len(items),
            user_votes={
                str(comment_id): int(vote.vote_type)
                for comment_id, vote in votes.items()
            },
        )
