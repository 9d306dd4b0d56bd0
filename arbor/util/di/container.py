"""Dependency injection container."""

from typing import Optional

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from arbor.config import Settings
from arbor.util.di import PROVIDERS, get_provider
from arbor.util.di.core import ProdConfigProvider


def create_container(settings: Optional[Settings] = None) -> AsyncContainer:
    """Build the application container.

    The given settings are served to every provider. Persistence comes from
    PostgreSQL unless ``DATABASE__BACKEND=memory`` selects the in-memory
    repository.

    Args:
        settings: Application settings (loaded from env if omitted)

    Returns:
        Configured DI container
    """
    settings = settings or Settings()
    in_memory = settings.database.backend == "memory"

    provider_instances = []
    for base in PROVIDERS:
        if base is ProdConfigProvider:
            provider_instances.append(ProdConfigProvider(settings))
            continue
        use_mock = in_memory and base.__mock_component__ == "persistence"
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    # Include FastapiProvider for proper integration with FastAPI
    return make_async_container(*provider_instances, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
