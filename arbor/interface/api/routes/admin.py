"""Maintenance routes.

Access control for these endpoints belongs to the gateway in front of the
service.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from arbor.application.usecase.maintenance import (
    PurgeDeletedRequest,
    PurgeDeletedResponse,
    PurgeDeletedUseCase,
    RecalculateScoresRequest,
    RecalculateScoresResponse,
    RecalculateScoresUseCase,
)
from arbor.config import MaintenanceSettings

router = APIRouter(prefix="/api/v1/admin", tags=["admin"], route_class=DishkaRoute)


@router.post("/purge-deleted", response_model=PurgeDeletedResponse)
async def purge_deleted(
    purge_deleted_use_case: FromDishka[PurgeDeletedUseCase],
    settings: FromDishka[MaintenanceSettings],
    older_than_days: int | None = Query(default=None),
) -> PurgeDeletedResponse:
    """Hard-delete soft-deleted comments older than the given number of days.

    Defaults to the configured retention period.
    """
    days = settings.purge_after_days if older_than_days is None else older_than_days
    return await purge_deleted_use_case.execute(
        PurgeDeletedRequest(older_than_days=days)
    )


@router.post("/recalculate-scores", response_model=RecalculateScoresResponse)
async def recalculate_scores(
    recalculate_scores_use_case: FromDishka[RecalculateScoresUseCase],
    request: RecalculateScoresRequest | None = None,
) -> RecalculateScoresResponse:
    """Recount votes for the given comments, or for every comment."""
    return await recalculate_scores_use_case.execute(
        request or RecalculateScoresRequest()
    )
