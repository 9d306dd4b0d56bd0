"""Statistics use cases."""

from .get_stats import GetStatsRequest, GetStatsResponse, GetStatsUseCase
from .get_top_comments import (
    GetTopCommentsRequest,
    GetTopCommentsResponse,
    GetTopCommentsUseCase,
)
from .get_user_comment_count import (
    GetUserCommentCountRequest,
    GetUserCommentCountResponse,
    GetUserCommentCountUseCase,
)

__all__ = [
    "GetStatsRequest",
    "GetStatsResponse",
    "GetStatsUseCase",
    "GetTopCommentsRequest",
    "GetTopCommentsResponse",
    "GetTopCommentsUseCase",
    "GetUserCommentCountRequest",
    "GetUserCommentCountResponse",
    "GetUserCommentCountUseCase",
]
