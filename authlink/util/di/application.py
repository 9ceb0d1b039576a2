"""Application layer DI providers."""

from dishka import Scope, provide

from authlink.application.usecase.auth import (
    GetCurrentAccountUseCase,
    LocalLoginUseCase,
    OAuthLoginUseCase,
    SignupUseCase,
)
from authlink.domain.service import (
    AccountResolver,
    AccountService,
    AuthService,
    CredentialService,
    JWTService,
)
from authlink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    @provide(scope=Scope.REQUEST)
    def get_oauth_login_use_case(
        self,
        auth_service: AuthService,
        account_resolver: AccountResolver,
        jwt_service: JWTService,
    ) -> OAuthLoginUseCase:
        """Provide OAuth login use case."""
        return OAuthLoginUseCase(
            auth_service=auth_service,
            account_resolver=account_resolver,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_local_login_use_case(
        self, credential_service: CredentialService, jwt_service: JWTService
    ) -> LocalLoginUseCase:
        """Provide local login use case."""
        return LocalLoginUseCase(
            credential_service=credential_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_signup_use_case(
        self, credential_service: CredentialService, jwt_service: JWTService
    ) -> SignupUseCase:
        """Provide sign-up use case."""
        return SignupUseCase(
            credential_service=credential_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_current_account_use_case(
        self, jwt_service: JWTService, account_service: AccountService
    ) -> GetCurrentAccountUseCase:
        """Provide get current account use case."""
        return GetCurrentAccountUseCase(
            jwt_service=jwt_service, account_service=account_service
        )
