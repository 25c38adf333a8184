"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from margin.config import Settings, VisitSettings
from margin.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_visit_settings(self, settings: Settings) -> VisitSettings:
        """Provide visit logger settings."""
        return settings.visits
