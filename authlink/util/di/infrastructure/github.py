"""GitHub infrastructure providers."""

from dishka import Scope, provide

from authlink.adapter.github.client import GitHubOAuthClient, RealGitHubOAuthClient
from authlink.config import Settings
from authlink.util.di.base import ProviderBase


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self, settings: Settings) -> GitHubOAuthClient:
        """Provide GitHub OAuth client.

        Raises:
            ConfigurationError: If GitHub OAuth credentials are not configured
        """
        github = settings.auth.github
        return RealGitHubOAuthClient(
            client_id=settings.require("AUTH__GITHUB__CLIENT_ID", github.client_id),
            client_secret=settings.require(
                "AUTH__GITHUB__CLIENT_SECRET", github.client_secret
            ),
            redirect_uri=settings.auth.github_callback_url,
            scope=github.scope,
        )
