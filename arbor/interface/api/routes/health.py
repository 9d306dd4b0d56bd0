"""Health check routes."""

from datetime import datetime, timezone

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from arbor.config import Settings
from arbor.domain.error import UnavailableError
from arbor.domain.repository import CommentRepository

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    backend: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    comment_repository: FromDishka[CommentRepository],
):
    """Report whether the service and its store are reachable.

    Returns 503 with status "degraded" when the store does not answer.
    """
    try:
        await comment_repository.ping()
        database = "ok"
    except UnavailableError as e:
        logfire.warn("Health check failed", error=e.message)
        database = "unreachable"

    response = HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        backend=settings.database.backend,
        database=database,
    )
    if database != "ok":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )
    return response
