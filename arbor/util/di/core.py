"""Core DI providers (non-mockable)."""

from typing import Optional

from dishka import Scope, provide

from arbor.config import CommentSettings, MaintenanceSettings, Settings
from arbor.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Uses the settings handed to the container, or loads them from environment
    variables and the .env file.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return self._settings or Settings()

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment limits."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_maintenance_settings(self, settings: Settings) -> MaintenanceSettings:
        """Provide maintenance settings."""
        return settings.maintenance
