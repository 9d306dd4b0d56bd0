"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends

from arbor.application.usecase.comment import (
    ListCommentsResponse,
    ListOptions,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
)
from arbor.application.usecase.stats import (
    GetUserCommentCountRequest,
    GetUserCommentCountResponse,
    GetUserCommentCountUseCase,
)
from arbor.interface.api.params import list_options

router = APIRouter(prefix="/api/v1/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/comments", response_model=ListCommentsResponse)
async def list_user_comments(
    user_id: str,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    options: ListOptions = Depends(list_options),
) -> ListCommentsResponse:
    """List a user's live comments across all roots."""
    return await list_user_comments_use_case.execute(
        ListUserCommentsRequest(user_id=user_id, options=options)
    )


@router.get("/{user_id}/count", response_model=GetUserCommentCountResponse)
async def get_user_comment_count(
    user_id: str,
    get_user_comment_count_use_case: FromDishka[GetUserCommentCountUseCase],
) -> GetUserCommentCountResponse:
    """Count a user's live comments."""
    return await get_user_comment_count_use_case.execute(
        GetUserCommentCountRequest(user_id=user_id)
    )
