"""Account aggregate root.

Accounts sign in with a local password and/or any number of linked OAuth
providers (GitHub, Google).
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from authlink.domain.model.common import DomainModel
from authlink.domain.value import AccountId, AuthProvider, EmailVerificationState


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LinkedCredential(DomainModel):
    """Access token recorded when a provider identity was linked."""

    provider: AuthProvider
    access_token: str
    linked_at: datetime = Field(default_factory=_utcnow)


class Account(DomainModel):
    """Local account.

    ``linked_credentials`` is an append-only log: every successful provider
    linkage adds one entry and earlier entries are never touched.
    """

    id: AccountId
    email: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None
    github_id: Optional[str] = None
    google_id: Optional[str] = None
    password_hash: Optional[str] = Field(default=None, repr=False)
    linked_credentials: tuple[LinkedCredential, ...] = ()
    email_verification: EmailVerificationState = EmailVerificationState.UNVERIFIED
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def provider_id(self, provider: AuthProvider) -> Optional[str]:
        """Return the linked subject id for an OAuth provider, if any."""
        if provider == AuthProvider.GITHUB:
            return self.github_id
        if provider == AuthProvider.GOOGLE:
            return self.google_id
        raise ValueError(f"Provider {provider.value} has no linked id")

    @property
    def is_verified(self) -> bool:
        return self.email_verification == EmailVerificationState.VERIFIED
