"""Google infrastructure providers."""

from dishka import Scope, provide

from authlink.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from authlink.config import Settings
from authlink.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Raises:
            ConfigurationError: If Google OAuth credentials are not configured
        """
        google = settings.auth.google
        return RealGoogleOAuthClient(
            client_id=settings.require("AUTH__GOOGLE__CLIENT_ID", google.client_id),
            client_secret=settings.require(
                "AUTH__GOOGLE__CLIENT_SECRET", google.client_secret
            ),
            redirect_uri=settings.auth.google_callback_url,
            scope=google.scope,
        )
