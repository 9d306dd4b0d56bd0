"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from arbor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentChildrenRequest,
    GetCommentChildrenResponse,
    GetCommentChildrenUseCase,
    GetCommentPathRequest,
    GetCommentPathResponse,
    GetCommentPathUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from arbor.application.usecase.vote import (
    BatchVoteItem,
    BatchVoteRequest,
    BatchVoteResponse,
    BatchVoteUseCase,
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetCommentVotesRequest,
    GetCommentVotesResponse,
    GetCommentVotesUseCase,
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
)
from arbor.domain.value import MAX_EXTERNAL_ID_LENGTH
from arbor.interface.api.identity import CallerId

router = APIRouter(prefix="/api/v1/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    root_id: str = Field(min_length=1, max_length=MAX_EXTERNAL_ID_LENGTH)
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    media_url: str | None = None
    link_url: str | None = None


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment. Omitted fields stay unchanged."""

    content: str | None = None
    media_url: str | None = None
    link_url: str | None = None


class CastVoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    vote_type: int  # 1 for up, -1 for down


class BatchVoteAPIRequest(BaseModel):
    """API request for applying several votes atomically."""

    votes: list[BatchVoteItem]


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    request: CreateCommentAPIRequest,
    caller_id: CallerId,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Create a top-level comment or a reply.

    Args:
        request: Comment creation data
        caller_id: Authenticated caller
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment with its path and depth
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            root_id=request.root_id,
            user_id=caller_id,
            content=request.content,
            parent_id=request.parent_id,
            media_url=request.media_url,
            link_url=request.link_url,
        )
    )


@router.post("/batch-vote", response_model=BatchVoteResponse)
async def batch_vote(
    request: BatchVoteAPIRequest,
    caller_id: CallerId,
    batch_vote_use_case: FromDishka[BatchVoteUseCase],
) -> BatchVoteResponse:
    """Apply up to 100 votes for the caller, all or nothing."""
    return await batch_vote_use_case.execute(
        BatchVoteRequest(user_id=caller_id, votes=request.votes)
    )


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> GetCommentResponse:
    """Get a comment by ID. Deleted comments are not found."""
    return await get_comment_use_case.execute(GetCommentRequest(comment_id=comment_id))


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    caller_id: CallerId,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
) -> UpdateCommentResponse:
    """Edit a comment's content or URLs.

    Only the author can edit. An empty URL clears it.

    Args:
        comment_id: Comment UUID
        request: Fields to change
        caller_id: Authenticated caller
        update_comment_use_case: Update comment use case from DI

    Returns:
        Updated comment including edit tracking fields
    """
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id,
            user_id=caller_id,
            content=request.content,
            media_url=request.media_url,
            link_url=request.link_url,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    caller_id: CallerId,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Soft-delete a comment. Only the author can delete."""
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, user_id=caller_id)
    )


@router.get("/{comment_id}/path", response_model=GetCommentPathResponse)
async def get_comment_path(
    comment_id: str,
    get_comment_path_use_case: FromDishka[GetCommentPathUseCase],
) -> GetCommentPathResponse:
    """Get the ancestor chain from the top-level comment down to this one."""
    return await get_comment_path_use_case.execute(
        GetCommentPathRequest(comment_id=comment_id)
    )


@router.get("/{comment_id}/children", response_model=GetCommentChildrenResponse)
async def get_comment_children(
    comment_id: str,
    get_comment_children_use_case: FromDishka[GetCommentChildrenUseCase],
    max_depth: int | None = Query(default=None),
) -> GetCommentChildrenResponse:
    """Get descendants of a comment up to max_depth levels below it."""
    return await get_comment_children_use_case.execute(
        GetCommentChildrenRequest(comment_id=comment_id, max_depth=max_depth)
    )


@router.post("/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_comment(
    comment_id: str,
    request: CastVoteAPIRequest,
    caller_id: CallerId,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
) -> CastVoteResponse:
    """Cast or change the caller's vote on a comment.

    Voting on your own comment is forbidden.

    Args:
        comment_id: Comment UUID
        request: Vote direction
        caller_id: Authenticated caller
        cast_vote_use_case: Cast vote use case from DI

    Returns:
        The stored vote and the comment's recomputed counters
    """
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            comment_id=comment_id, user_id=caller_id, vote_type=request.vote_type
        )
    )


@router.delete("/{comment_id}/vote", response_model=RemoveVoteResponse)
async def remove_vote(
    comment_id: str,
    caller_id: CallerId,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
) -> RemoveVoteResponse:
    """Remove the caller's vote. Succeeds whether or not one existed."""
    return await remove_vote_use_case.execute(
        RemoveVoteRequest(comment_id=comment_id, user_id=caller_id)
    )


@router.get("/{comment_id}/vote", response_model=GetUserVoteResponse)
async def get_my_vote(
    comment_id: str,
    caller_id: CallerId,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
) -> GetUserVoteResponse:
    """Get the caller's vote on a comment, if any."""
    return await get_user_vote_use_case.execute(
        GetUserVoteRequest(comment_id=comment_id, user_id=caller_id)
    )


@router.get("/{comment_id}/votes", response_model=GetCommentVotesResponse)
async def get_comment_votes(
    comment_id: str,
    get_comment_votes_use_case: FromDishka[GetCommentVotesUseCase],
) -> GetCommentVotesResponse:
    """List every vote on a comment."""
    return await get_comment_votes_use_case.execute(
        GetCommentVotesRequest(comment_id=comment_id)
    )
