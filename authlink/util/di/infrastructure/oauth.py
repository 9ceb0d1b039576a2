"""Strategy registry provider: the one place sign-in strategies are registered."""

from dishka import Scope, provide

from authlink.adapter.github.client import GitHubOAuthClient
from authlink.adapter.google.client import GoogleOAuthClient
from authlink.domain.service.auth_service import AuthStrategyRegistry
from authlink.util.di.base import ProviderBase


class StrategyRegistryProvider(ProviderBase):
    """Builds the AuthStrategyRegistry once per application."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_strategy_registry(
        self,
        github_oauth_client: GitHubOAuthClient,
        google_oauth_client: GoogleOAuthClient,
    ) -> AuthStrategyRegistry:
        """Register every OAuth strategy.

        Args:
            github_oauth_client: GitHub OAuth client (specific type)
            google_oauth_client: Google OAuth client (specific type)

        Returns:
            Populated strategy registry
        """
        registry = AuthStrategyRegistry()
        registry.register(github_oauth_client)
        registry.register(google_oauth_client)
        return registry
