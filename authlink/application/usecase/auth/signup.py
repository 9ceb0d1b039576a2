"""Local sign-up use case."""

from pydantic import BaseModel, Field, field_validator

from authlink.application.usecase.auth.result import AuthFailureKind, AuthResult
from authlink.application.usecase.base import BaseUseCase
from authlink.domain.error import PersistenceError
from authlink.domain.service import CredentialService, JWTService
from authlink.domain.value import AuthProvider
from authlink.util.password import MAX_PASSWORD_BYTES, password_too_long


class SignupRequest(BaseModel):
    """Sign-up form.

    Lengths match the ``accounts`` columns; the password is capped at what
    bcrypt can hash.
    """

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8)
    username: str | None = Field(default=None, max_length=255)
    name: str | None = Field(default=None, max_length=255)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class SignupUseCase(BaseUseCase[SignupRequest, AuthResult]):
    """Use case for creating an account with a local password."""

    def __init__(
        self, credential_service: CredentialService, jwt_service: JWTService
    ) -> None:
        self.credential_service = credential_service
        self.jwt_service = jwt_service

    async def execute(self, request: SignupRequest) -> AuthResult:
        """Create the account and sign it in.

        Raises:
            ValidationError: If the email or username is already taken
        """
        try:
            account = await self.credential_service.register(
                email=request.email,
                password=request.password,
                username=request.username,
                name=request.name,
            )
        except PersistenceError as e:
            return AuthResult.failed(AuthFailureKind.PERSISTENCE_FAILURE, str(e))

        token = self.jwt_service.create_token(
            account_id=str(account.id), provider=AuthProvider.LOCAL.value
        )
        return AuthResult.succeeded(account, token)
