"""Get comment path use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService

from .common import CommentItem, parse_comment_id


class GetCommentPathRequest(BaseModel):
    """Get comment path request."""

    comment_id: str


class GetCommentPathResponse(BaseModel):
    """Ancestor chain from the top-level comment down to the requested one."""

    comment_id: str
    path: list[CommentItem]


class GetCommentPathUseCase:
    """Use case for reconstructing a comment's ancestor chain.

    Deleted ancestors keep their place in the chain with their content
    withheld.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentPathRequest) -> GetCommentPathResponse:
        chain = await self.comment_service.get_comment_path(
            parse_comment_id(request.comment_id)
        )
        return GetCommentPathResponse(
            comment_id=request.comment_id,
            path=[CommentItem.from_domain(c) for c in chain],
        )
