"""Local (email/username + password) login use case."""

import logfire
from pydantic import BaseModel

from authlink.application.usecase.auth.result import AuthFailureKind, AuthResult
from authlink.application.usecase.base import BaseUseCase
from authlink.domain.error import (
    AccountNotFoundError,
    InvalidCredentialsError,
    PersistenceError,
)
from authlink.domain.service import CredentialService, JWTService
from authlink.domain.value import AuthProvider


class LocalLoginRequest(BaseModel):
    """Local login form."""

    email: str  # Email or username
    password: str


class LocalLoginUseCase(BaseUseCase[LocalLoginRequest, AuthResult]):
    """Use case for signing in with a local password."""

    def __init__(
        self, credential_service: CredentialService, jwt_service: JWTService
    ) -> None:
        self.credential_service = credential_service
        self.jwt_service = jwt_service

    async def execute(self, request: LocalLoginRequest) -> AuthResult:
        """Verify credentials and issue a session token.

        Failures are returned, not raised; the failure kind records whether
        the account was missing, the password wrong or the lookup broken.
        """
        try:
            account = await self.credential_service.verify(
                request.email, request.password
            )
        except AccountNotFoundError as e:
            return AuthResult.failed(AuthFailureKind.NOT_FOUND, str(e))
        except InvalidCredentialsError as e:
            return AuthResult.failed(AuthFailureKind.INVALID_CREDENTIAL, str(e))
        except PersistenceError as e:
            logfire.error("Local login failed on persistence", error=str(e))
            return AuthResult.failed(AuthFailureKind.PERSISTENCE_FAILURE, str(e))

        token = self.jwt_service.create_token(
            account_id=str(account.id), provider=AuthProvider.LOCAL.value
        )
        return AuthResult.succeeded(account, token)
