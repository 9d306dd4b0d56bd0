"""FastAPI application."""

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator, Optional

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI

from arbor.application.usecase.maintenance import (
    PurgeDeletedRequest,
    PurgeDeletedUseCase,
)
from arbor.config import MaintenanceSettings, Settings
from arbor.domain.error import DomainError
from arbor.interface.api.routes import admin, comments, health, roots, users
from arbor.interface.error import register_error_handlers
from arbor.util.di.container import create_container, setup_di
from arbor.util.observability import instrument_fastapi


async def run_purge_job(container: AsyncContainer, settings: MaintenanceSettings) -> None:
    """Purge old soft-deleted comments every ``purge_interval_minutes``.

    Each run uses its own request scope, so it commits independently.
    Failures, expected or not, are logged and the next run proceeds on
    schedule. Only cancellation stops the loop.
    """
    interval = settings.purge_interval_minutes * 60
    while True:
        await asyncio.sleep(interval)
        try:
            async with container() as request_container:
                use_case = await request_container.get(PurgeDeletedUseCase)
                result = await use_case.execute(
                    PurgeDeletedRequest(older_than_days=settings.purge_after_days)
                )
            logfire.info("Scheduled purge finished", purged=result.purged)
        except DomainError as e:
            logfire.error("Scheduled purge failed", kind=e.kind, error=e.message)
        except Exception:
            logfire.exception("Scheduled purge crashed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the periodic purge job and close the container on shutdown."""
    container: AsyncContainer = app.state.dishka_container
    settings = await container.get(MaintenanceSettings)

    purge_task: Optional[asyncio.Task] = None
    if settings.purge_interval_minutes > 0:
        purge_task = asyncio.create_task(run_purge_job(container, settings))
        logfire.info(
            "Purge job scheduled",
            interval_minutes=settings.purge_interval_minutes,
            older_than_days=settings.purge_after_days,
        )

    try:
        yield
    finally:
        if purge_task is not None:
            purge_task.cancel()
            with suppress(asyncio.CancelledError):
                await purge_task
        await container.close()


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        container: DI container to use (built from settings if omitted)
    """
    app_instance = FastAPI(
        title="Arbor API",
        description="Threaded comments with voting for any external content",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container(Settings()))

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(roots.router)
    app_instance.include_router(users.router)
    app_instance.include_router(admin.router)

    return app_instance
