"""Get comment stats use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService
from arbor.domain.value import RootId


class GetStatsRequest(BaseModel):
    """Get stats request."""

    root_id: str


class GetStatsResponse(BaseModel):
    """Aggregate figures over the live comments of a root."""

    root_id: str
    total_count: int
    total_score: int
    max_depth: int
    recent_count: int
    edited_count: int
    total_edits: int
    edit_rate: float
    avg_edits_per_comment: float


class GetStatsUseCase:
    """Use case for a root's comment statistics."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get stats use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetStatsRequest) -> GetStatsResponse:
        stats = await self.comment_service.get_stats(RootId(request.root_id))
        return GetStatsResponse(**stats.model_dump())
