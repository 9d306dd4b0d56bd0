"""Get comment tree use case."""

from pydantic import BaseModel

from arbor.domain.model import CommentTreeNode
from arbor.domain.service import CommentService
from arbor.domain.value import RootId, SortField

from .common import CommentTreeNodeResponse


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    root_id: str
    max_depth: int | None = None  # Clamped to [1, 50], default 10
    sort_by: SortField | None = None  # Default: score


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    root_id: str
    roots: list[CommentTreeNodeResponse]
    total_comments: int


class GetCommentTreeUseCase:
    """Use case for fetching a root's comments as nested threads.

    Replies whose parent falls outside the fetched set (for example beyond
    the depth limit) are returned as additional top-level nodes.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Steps:
        1. Build the forest via the comment service
        2. Convert domain tree nodes to response models
        3. Count every node in the forest

        Args:
            request: Tree request with root ID and optional depth/sort

        Returns:
            Forest of comment threads and the number of comments in it
        """
        forest: list[CommentTreeNode] = await self.comment_service.get_comment_tree(
            RootId(request.root_id),
            max_depth=request.max_depth,
            sort_by=request.sort_by,
        )

        return GetCommentTreeResponse(
            root_id=request.root_id,
            roots=[CommentTreeNodeResponse.from_domain(node) for node in forest],
            total_comments=sum(node.size() for node in forest),
        )
