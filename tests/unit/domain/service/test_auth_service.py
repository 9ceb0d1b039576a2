"""Unit tests for the strategy registry and AuthService."""

import pytest

from authlink.adapter.github.client import MockGitHubOAuthClient
from authlink.adapter.google.client import MockGoogleOAuthClient
from authlink.domain.service import AuthService
from authlink.domain.service.auth_service import AuthStrategy, AuthStrategyRegistry
from authlink.domain.value import AuthProvider, GitHubProfile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class LocalStrategy(AuthStrategy):
    provider = AuthProvider.LOCAL


class TestAuthStrategyRegistry:
    def test_register_and_get(self):
        registry = AuthStrategyRegistry()
        github = MockGitHubOAuthClient()

        registry.register(github)

        assert registry.get(AuthProvider.GITHUB) is github
        assert registry.providers == [AuthProvider.GITHUB]

    def test_duplicate_provider_rejected(self):
        registry = AuthStrategyRegistry()
        registry.register(MockGitHubOAuthClient())

        with pytest.raises(ValueError, match="already registered for github"):
            registry.register(MockGitHubOAuthClient())

    def test_unregistered_provider(self):
        registry = AuthStrategyRegistry()

        with pytest.raises(ValueError, match="Unsupported provider: google"):
            registry.get(AuthProvider.GOOGLE)

    def test_oauth_client_rejects_non_oauth_strategy(self):
        registry = AuthStrategyRegistry()
        registry.register(LocalStrategy())

        with pytest.raises(ValueError, match="does not use OAuth"):
            registry.oauth_client(AuthProvider.LOCAL)

    @pytest.mark.asyncio
    async def test_container_registers_both_providers(self, unit_env):
        registry = await unit_env.get(AuthStrategyRegistry)

        assert set(registry.providers) == {AuthProvider.GITHUB, AuthProvider.GOOGLE}


class TestAuthService:
    @pytest.mark.asyncio
    async def test_initiate_login_delegates_to_provider(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        url = await auth_service.initiate_login(AuthProvider.GOOGLE, "s1")

        assert url.startswith("https://accounts.google.com/")
        assert "state=s1" in url

    @pytest.mark.asyncio
    async def test_complete_login_returns_provider_profile(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        grant = await auth_service.complete_login(AuthProvider.GITHUB, "code", "s1")

        assert isinstance(grant.profile, GitHubProfile)
        assert grant.access_token.startswith("gho_mock_")

    @pytest.mark.asyncio
    async def test_local_provider_has_no_oauth_flow(self):
        registry = AuthStrategyRegistry()
        registry.register(MockGoogleOAuthClient())
        auth_service = AuthService(registry)

        with pytest.raises(ValueError):
            await auth_service.initiate_login(AuthProvider.LOCAL, "s1")
