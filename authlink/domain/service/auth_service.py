"""Authentication strategies and the multi-provider auth service."""

import logfire

from authlink.domain.value import AuthProvider, ProviderProfile
from authlink.domain.value.common import ValueObject

from .base import Service


class OAuthGrant(ValueObject):
    """Result of a completed OAuth authorization code exchange."""

    access_token: str
    refresh_token: str | None = None
    profile: ProviderProfile


class AuthStrategy:
    """A way of signing in, identified by its provider."""

    provider: AuthProvider


class OAuthClient(AuthStrategy):
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> OAuthGrant:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Tokens and the provider's raw profile
        """
        raise NotImplementedError


class AuthStrategyRegistry:
    """Registry of sign-in strategies, populated once at startup."""

    def __init__(self) -> None:
        self._strategies: dict[AuthProvider, AuthStrategy] = {}

    def register(self, strategy: AuthStrategy) -> None:
        """Register a strategy for its provider.

        Raises:
            ValueError: If a strategy is already registered for the provider
        """
        if strategy.provider in self._strategies:
            raise ValueError(
                f"Strategy already registered for {strategy.provider.value}"
            )
        self._strategies[strategy.provider] = strategy
        logfire.info("Auth strategy registered", provider=strategy.provider.value)

    def get(self, provider: AuthProvider) -> AuthStrategy:
        """Get the strategy for a provider.

        Raises:
            ValueError: If provider not registered
        """
        strategy = self._strategies.get(provider)
        if strategy is None:
            raise ValueError(f"Unsupported provider: {provider.value}")
        return strategy

    def oauth_client(self, provider: AuthProvider) -> OAuthClient:
        """Get the OAuth client for a provider.

        Raises:
            ValueError: If provider not registered or not an OAuth provider
        """
        strategy = self.get(provider)
        if not isinstance(strategy, OAuthClient):
            raise ValueError(f"Provider {provider.value} does not use OAuth")
        return strategy

    @property
    def providers(self) -> list[AuthProvider]:
        return list(self._strategies)


class AuthService(Service):
    """Domain service for multi-provider OAuth operations.

    Coordinates authentication across the registered OAuth providers
    (GitHub, Google).
    """

    def __init__(self, registry: AuthStrategyRegistry) -> None:
        """Initialize auth service.

        Args:
            registry: Registered sign-in strategies
        """
        self.registry = registry

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Returns:
            Authorization URL to redirect user to

        Raises:
            ValueError: If provider not supported
        """
        client = self.registry.oauth_client(provider)
        return await client.initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> OAuthGrant:
        """Complete OAuth login flow for any provider.

        Returns:
            Tokens and raw profile from the provider

        Raises:
            ValueError: If provider not supported
        """
        client = self.registry.oauth_client(provider)
        return await client.complete_authorization(code, state)
