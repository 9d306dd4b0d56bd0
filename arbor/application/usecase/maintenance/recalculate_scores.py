"""Recalculate scores use case."""

from pydantic import BaseModel

from arbor.application.usecase.comment import parse_comment_id
from arbor.domain.service import ScoreService


class RecalculateScoresRequest(BaseModel):
    """Recalculate scores request.

    Without comment IDs every comment is recounted.
    """

    comment_ids: list[str] | None = None


class RecalculateScoresResponse(BaseModel):
    """Recalculate scores response."""

    updated: int


class RecalculateScoresUseCase:
    """Use case for rebuilding vote counters from the stored votes."""

    def __init__(self, score_service: ScoreService) -> None:
        """Initialize recalculate scores use case.

        Args:
            score_service: Score domain service
        """
        self.score_service = score_service

    async def execute(
        self, request: RecalculateScoresRequest
    ) -> RecalculateScoresResponse:
        if request.comment_ids is None:
            updated = await self.score_service.recompute_all()
        else:
            updated = await self.score_service.recompute_many(
                [parse_comment_id(cid) for cid in request.comment_ids]
            )
        return RecalculateScoresResponse(updated=updated)
