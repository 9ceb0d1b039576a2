"""Get current account use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from authlink.application.usecase.base import BaseUseCase
from authlink.domain.model import Account
from authlink.domain.service import AccountService, JWTService
from authlink.domain.value import AccountId, AuthProvider, EmailVerificationState


class GetCurrentAccountRequest(BaseModel):
    """Get current account request."""

    token: str  # JWT token from the session cookie


class AccountView(BaseModel):
    """Public view of an account (no password hash, no tokens)."""

    account_id: str
    email: str | None
    username: str | None
    name: str | None
    email_verification: EmailVerificationState
    linked_providers: list[AuthProvider]
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        linked = [
            provider
            for provider, linked_id in (
                (AuthProvider.GITHUB, account.github_id),
                (AuthProvider.GOOGLE, account.google_id),
            )
            if linked_id
        ]
        return cls(
            account_id=str(account.id),
            email=account.email,
            username=account.username,
            name=account.name,
            email_verification=account.email_verification,
            linked_providers=linked,
            created_at=account.created_at,
        )


class GetCurrentAccountUseCase(BaseUseCase[GetCurrentAccountRequest, AccountView]):
    """Use case for loading the account behind a session token."""

    def __init__(self, jwt_service: JWTService, account_service: AccountService) -> None:
        self.jwt_service = jwt_service
        self.account_service = account_service

    async def execute(self, request: GetCurrentAccountRequest) -> AccountView:
        """Deserialize the session: verify the token, then load the account.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If account not found
        """
        payload = self.jwt_service.verify_token(request.token)
        account = await self.account_service.get_by_id(
            AccountId(UUID(payload.account_id))
        )
        return AccountView.from_account(account)
