"""Local (email/username + password) credential domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from authlink.config import AuthSettings
from authlink.domain.error import (
    AccountNotFoundError,
    InvalidCredentialsError,
    ValidationError,
)
from authlink.domain.model import Account
from authlink.domain.value import AccountId, EmailVerificationState, Username
from authlink.util.password import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)

from .account_service import AccountService
from .base import Service


class CredentialService(Service):
    """Verifies and registers local password credentials."""

    def __init__(
        self, account_service: AccountService, auth_settings: AuthSettings
    ) -> None:
        """Initialize credential service.

        Args:
            account_service: Account domain service
            auth_settings: Authentication settings (bcrypt cost)
        """
        self.account_service = account_service
        self.auth_settings = auth_settings

    async def verify(self, identifier: str, password: str) -> Account:
        """Verify a local sign-in.

        Args:
            identifier: Email or username as typed by the user
            password: Plaintext password

        Returns:
            The matching account

        Raises:
            AccountNotFoundError: No account has this email or username
            InvalidCredentialsError: Password does not match
            PersistenceError: If the lookup fails
        """
        with logfire.span("credential_service.verify"):
            account = await self.account_service.get_by_email_or_username(
                identifier.lower()
            )
            if not account:
                logfire.warn("Local sign-in for unknown account")
                raise AccountNotFoundError(identifier)

            if not account.password_hash or not verify_password(
                password, account.password_hash
            ):
                logfire.warn("Local sign-in rejected", account_id=str(account.id))
                raise InvalidCredentialsError()

            logfire.info("Local sign-in accepted", account_id=str(account.id))
            return account

    async def register(
        self,
        email: str,
        password: str,
        username: str | None = None,
        name: str | None = None,
    ) -> Account:
        """Create an account with a local password.

        Raises:
            ValidationError: If the email or username is already taken, or a
                field is too long to store
            PersistenceError: If the lookup or save fails
        """
        with logfire.span("credential_service.register"):
            email = email.strip().lower()
            if len(email) > 255:
                raise ValidationError("Email must be at most 255 characters")
            if name and len(name) > 255:
                raise ValidationError("Name must be at most 255 characters")
            if password_too_long(password):
                raise ValidationError(
                    f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
                )
            if await self.account_service.get_by_email_or_username(email):
                raise ValidationError(f"Email {email} is already registered")
            if username:
                try:
                    username = Username(username).root
                except PydanticValidationError as e:
                    raise ValidationError("Username must be 1-255 characters") from e
                if await self.account_service.get_by_email_or_username(
                    username.lower()
                ):
                    raise ValidationError(f"Username {username} is already taken")

            now = datetime.now(timezone.utc)
            account = Account(
                id=AccountId(uuid4()),
                email=email,
                username=username,
                name=name,
                password_hash=hash_password(
                    password, rounds=self.auth_settings.bcrypt_rounds
                ),
                email_verification=EmailVerificationState.UNVERIFIED,
                created_at=now,
                updated_at=now,
            )
            return await self.account_service.save(account)
