"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from authlink.config import AuthSettings, Settings
from authlink.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings once the session signing key is usable.

        Raises:
            ConfigurationError: If AUTH__JWT_SECRET is unset, or left at the
                placeholder in production
        """
        settings.require("AUTH__JWT_SECRET", settings.auth.jwt_secret)
        return settings.auth
