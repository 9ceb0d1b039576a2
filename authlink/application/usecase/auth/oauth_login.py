"""OAuth login use case."""

import logfire
from pydantic import BaseModel

from authlink.adapter.error import ProviderProtocolError
from authlink.application.usecase.auth.result import AuthFailureKind, AuthResult
from authlink.application.usecase.base import BaseUseCase
from authlink.domain.error import PersistenceError
from authlink.domain.service import AccountResolver, AuthService, JWTService
from authlink.domain.value import AuthProvider, normalize_profile


class OAuthLoginRequest(BaseModel):
    """Login request from an OAuth callback."""

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter for CSRF verification


class OAuthLoginUseCase(BaseUseCase[OAuthLoginRequest, AuthResult]):
    """Use case for signing in with GitHub or Google."""

    def __init__(
        self,
        auth_service: AuthService,
        account_resolver: AccountResolver,
        jwt_service: JWTService,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: Authentication domain service (all OAuth providers)
            account_resolver: Account linking domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.account_resolver = account_resolver
        self.jwt_service = jwt_service

    async def execute(self, request: OAuthLoginRequest) -> AuthResult:
        """Execute OAuth login flow.

        Steps:
        1. Complete OAuth flow with provider and get the raw profile
        2. Normalize the profile
        3. Find, link or create the account
        4. Issue a session token

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Successful result with account and token, or a persistence failure

        Raises:
            ValueError: If provider not supported
            ProviderError: If the provider rejects the exchange or returns
                a malformed profile
        """
        grant = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )
        profile = normalize_profile(grant.profile)
        if profile.provider != request.provider:
            raise ProviderProtocolError(
                f"Expected {request.provider.value} profile, got {profile.provider.value}"
            )

        with logfire.span(
            "oauth_login",
            provider=profile.provider.value,
            subject_id=profile.subject_id,
        ):
            try:
                account = await self.account_resolver.resolve_profile(
                    profile, grant.access_token
                )
            except PersistenceError as e:
                logfire.error(
                    "OAuth login failed on persistence",
                    provider=profile.provider.value,
                    error=str(e),
                )
                return AuthResult.failed(AuthFailureKind.PERSISTENCE_FAILURE, str(e))

            token = self.jwt_service.create_token(
                account_id=str(account.id), provider=profile.provider.value
            )
            logfire.info(
                "OAuth login succeeded",
                account_id=str(account.id),
                provider=profile.provider.value,
            )
            return AuthResult.succeeded(account, token)
