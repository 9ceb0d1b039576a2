"""Account linking for OAuth sign-in.

Decides whether an external identity attaches to an existing account or
creates a new one, and copies profile fields onto the account.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from authlink.domain.error import PersistenceError
from authlink.domain.model.account import Account, LinkedCredential
from authlink.domain.repository.account import AccountRepository
from authlink.domain.value import (
    AccountId,
    AuthProvider,
    CandidateEmail,
    EmailVerificationState,
    ExternalProfile,
)

from .base import Service

_LINKED_ID_FIELDS = {
    AuthProvider.GITHUB: "github_id",
    AuthProvider.GOOGLE: "google_id",
}


def get_verified_emails(candidates: Optional[Sequence[CandidateEmail]]) -> list[str]:
    """Return the addresses marked verified, in input order.

    Example:
        [a@x.com (verified), b@x.com (unverified)] -> ["a@x.com"]
    """
    return [item.address for item in (candidates or []) if item.is_verified]


def get_primary_email(candidates: Optional[Sequence[CandidateEmail]]) -> Optional[str]:
    """Return the address marked primary, or None if there is none."""
    for item in candidates or []:
        if item.is_primary:
            return item.address
    return None


class AccountResolver(Service):
    """Finds or creates the local account for an OAuth sign-in."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account resolver.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def resolve_profile(
        self, profile: ExternalProfile, access_token: str
    ) -> Account:
        """Resolve a normalized profile. See ``resolve``."""
        return await self.resolve(
            provider=profile.provider,
            subject_id=profile.subject_id,
            candidate_emails=profile.candidate_emails,
            display_name=profile.display_name,
            username_hint=profile.username_hint,
            access_token=access_token,
        )

    async def resolve(
        self,
        provider: AuthProvider,
        subject_id: str,
        candidate_emails: Sequence[CandidateEmail],
        display_name: Optional[str],
        username_hint: Optional[str],
        access_token: str,
    ) -> Account:
        """Attach an external identity to an account, creating one if needed.

        Steps:
        1. Account already linked to ``subject_id``: return it untouched
        2. Account owning one of the verified emails: link it, fill empty
           fields, append the credential, mark verified, save
        3. Otherwise: create and save a new verified account

        Args:
            provider: OAuth provider (GitHub or Google)
            subject_id: Provider-scoped subject identifier
            candidate_emails: Emails offered by the provider, in provider order
            display_name: Display name from the provider
            username_hint: Suggested username from the provider
            access_token: Access token issued by the provider

        Returns:
            The linked, updated or new account

        Raises:
            ValueError: If the provider cannot be linked (e.g. local)
            PersistenceError: If a repository lookup or save fails
        """
        linked_id_field = _LINKED_ID_FIELDS.get(provider)
        if linked_id_field is None:
            raise ValueError(f"Provider {provider.value} cannot be linked")

        with logfire.span(
            "account_resolver.resolve",
            provider=provider.value,
            subject_id=subject_id,
        ):
            existing = await self._guard(
                "find_by_provider_id",
                self.account_repository.find_by_provider_id(provider, subject_id),
            )
            if existing:
                logfire.info(
                    "Account already linked",
                    account_id=str(existing.id),
                    provider=provider.value,
                )
                return existing

            verified_emails = get_verified_emails(candidate_emails)
            primary_email = get_primary_email(candidate_emails)
            credential = LinkedCredential(
                provider=provider,
                access_token=access_token,
                linked_at=datetime.now(timezone.utc),
            )

            email_owner = await self._guard(
                "find_by_emails",
                self.account_repository.find_by_emails(verified_emails),
            )
            if email_owner:
                linked = email_owner.model_copy(
                    update={
                        "email": email_owner.email or primary_email,
                        linked_id_field: subject_id,
                        "username": email_owner.username or username_hint,
                        "linked_credentials": (
                            *email_owner.linked_credentials,
                            credential,
                        ),
                        "name": email_owner.name or display_name,
                        "email_verification": EmailVerificationState.VERIFIED,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
                saved = await self._guard(
                    "save", self.account_repository.save(linked)
                )
                logfire.info(
                    "Provider linked to existing account",
                    account_id=str(saved.id),
                    provider=provider.value,
                )
                return saved

            now = datetime.now(timezone.utc)
            account = Account(
                id=AccountId(uuid4()),
                email=primary_email,
                username=username_hint,
                name=display_name,
                linked_credentials=(credential,),
                email_verification=EmailVerificationState.VERIFIED,
                created_at=now,
                updated_at=now,
                **{linked_id_field: subject_id},
            )
            saved = await self._guard("save", self.account_repository.save(account))
            logfire.info(
                "Account created from provider profile",
                account_id=str(saved.id),
                provider=provider.value,
            )
            return saved

    @staticmethod
    async def _guard(operation: str, awaitable):
        try:
            return await awaitable
        except Exception as e:
            logfire.error(
                "Account repository failure", operation=operation, error=str(e)
            )
            raise PersistenceError(operation, e) from e
