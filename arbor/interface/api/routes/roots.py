"""Routes scoped to a root (the external content a thread hangs off)."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from arbor.application.usecase.comment import (
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    ListCommentsResponse,
    ListCommentsWithVotesRequest,
    ListCommentsWithVotesResponse,
    ListCommentsWithVotesUseCase,
    ListOptions,
    ListRootCommentsRequest,
    ListRootCommentsUseCase,
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
)
from arbor.application.usecase.stats import (
    GetStatsRequest,
    GetStatsResponse,
    GetStatsUseCase,
    GetTopCommentsRequest,
    GetTopCommentsResponse,
    GetTopCommentsUseCase,
)
from arbor.domain.value import SortField
from arbor.interface.api.identity import CallerId
from arbor.interface.api.params import list_options

router = APIRouter(prefix="/api/v1/roots", tags=["roots"], route_class=DishkaRoute)


@router.get("/{root_id}/comments", response_model=ListCommentsResponse)
async def list_root_comments(
    root_id: str,
    list_root_comments_use_case: FromDishka[ListRootCommentsUseCase],
    options: ListOptions = Depends(list_options),
) -> ListCommentsResponse:
    """List a root's live comments.

    Args:
        root_id: Root identifier
        list_root_comments_use_case: Listing use case from DI
        options: Filters, ordering and paging from the query string

    Returns:
        One page of comments
    """
    return await list_root_comments_use_case.execute(
        ListRootCommentsRequest(root_id=root_id, options=options)
    )


@router.get(
    "/{root_id}/comments/with-votes", response_model=ListCommentsWithVotesResponse
)
async def list_root_comments_with_votes(
    root_id: str,
    caller_id: CallerId,
    list_with_votes_use_case: FromDishka[ListCommentsWithVotesUseCase],
    options: ListOptions = Depends(list_options),
) -> ListCommentsWithVotesResponse:
    """List a root's comments with the caller's vote on each."""
    return await list_with_votes_use_case.execute(
        ListCommentsWithVotesRequest(root_id=root_id, user_id=caller_id, options=options)
    )


@router.get("/{root_id}/tree", response_model=GetCommentTreeResponse)
async def get_comment_tree(
    root_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    max_depth: int | None = Query(default=None),
    sort_by: SortField | None = Query(default=None),
) -> GetCommentTreeResponse:
    """Get a root's comments as nested threads.

    max_depth is clamped to [1, 50] (default 10); siblings are ordered by
    sort_by (default score).
    """
    return await get_comment_tree_use_case.execute(
        GetCommentTreeRequest(root_id=root_id, max_depth=max_depth, sort_by=sort_by)
    )


@router.get("/{root_id}/stats", response_model=GetStatsResponse)
async def get_stats(
    root_id: str,
    get_stats_use_case: FromDishka[GetStatsUseCase],
) -> GetStatsResponse:
    """Get aggregate statistics over a root's live comments."""
    return await get_stats_use_case.execute(GetStatsRequest(root_id=root_id))


@router.get("/{root_id}/top", response_model=GetTopCommentsResponse)
async def get_top_comments(
    root_id: str,
    get_top_comments_use_case: FromDishka[GetTopCommentsUseCase],
    limit: int | None = Query(default=None),
    time_range: str | None = Query(default=None),
) -> GetTopCommentsResponse:
    """Get the highest scoring comments created within a time window."""
    return await get_top_comments_use_case.execute(
        GetTopCommentsRequest(root_id=root_id, limit=limit, time_range=time_range)
    )


@router.get("/{root_id}/search", response_model=SearchCommentsResponse)
async def search_comments(
    root_id: str,
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    q: str = Query(default=""),
    options: ListOptions = Depends(list_options),
) -> SearchCommentsResponse:
    """Search a page of a root's comments for a case-insensitive substring."""
    return await search_comments_use_case.execute(
        SearchCommentsRequest(root_id=root_id, query=q, options=options)
    )
