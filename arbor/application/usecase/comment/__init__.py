"""Comment use cases."""

from .common import CommentItem, CommentTreeNodeResponse, ListOptions, parse_comment_id
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .get_comment_children import (
    GetCommentChildrenRequest,
    GetCommentChildrenResponse,
    GetCommentChildrenUseCase,
)
from .get_comment_path import (
    GetCommentPathRequest,
    GetCommentPathResponse,
    GetCommentPathUseCase,
)
from .get_comment_tree import (
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
)
from .list_comments import (
    ListCommentsResponse,
    ListCommentsWithVotesRequest,
    ListCommentsWithVotesResponse,
    ListCommentsWithVotesUseCase,
    ListRootCommentsRequest,
    ListRootCommentsUseCase,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
)
from .search_comments import (
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
)
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentItem",
    "CommentTreeNodeResponse",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentChildrenRequest",
    "GetCommentChildrenResponse",
    "GetCommentChildrenUseCase",
    "GetCommentPathRequest",
    "GetCommentPathResponse",
    "GetCommentPathUseCase",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentTreeRequest",
    "GetCommentTreeResponse",
    "GetCommentTreeUseCase",
    "GetCommentUseCase",
    "ListCommentsResponse",
    "ListCommentsWithVotesRequest",
    "ListCommentsWithVotesResponse",
    "ListCommentsWithVotesUseCase",
    "ListOptions",
    "ListRootCommentsRequest",
    "ListRootCommentsUseCase",
    "ListUserCommentsRequest",
    "ListUserCommentsUseCase",
    "SearchCommentsRequest",
    "SearchCommentsResponse",
    "SearchCommentsUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
    "parse_comment_id",
]
