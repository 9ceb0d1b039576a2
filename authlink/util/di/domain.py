"""Domain layer DI providers."""

from dishka import Scope, provide

from authlink.config import AuthSettings
from authlink.domain.repository import AccountRepository
from authlink.domain.service import (
    AccountResolver,
    AccountService,
    AuthService,
    AuthStrategyRegistry,
    CredentialService,
    JWTService,
)
from authlink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, registry: AuthStrategyRegistry) -> AuthService:
        """Provide multi-provider authentication domain service."""
        return AuthService(registry=registry)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_account_resolver(
        self, account_repository: AccountRepository
    ) -> AccountResolver:
        """Provide account linking domain service."""
        return AccountResolver(account_repository=account_repository)

    @provide
    def get_credential_service(
        self, account_service: AccountService, auth_settings: AuthSettings
    ) -> CredentialService:
        """Provide local credential domain service."""
        return CredentialService(
            account_service=account_service, auth_settings=auth_settings
        )
