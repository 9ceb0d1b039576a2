"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from authlink.domain.model.account import Account
from authlink.domain.value import AccountId, AuthProvider


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_id(
        self, provider: AuthProvider, subject_id: str
    ) -> Optional[Account]:
        """Find the account linked to an external provider identity.

        Args:
            provider: OAuth provider (GitHub or Google)
            subject_id: Provider-scoped subject identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_emails(self, emails: Sequence[str]) -> Optional[Account]:
        """Find an account whose email is one of the given addresses.

        Matching is exact. An empty sequence never matches.

        Args:
            emails: Candidate email addresses

        Returns:
            The first matching account, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email_or_username(self, identifier: str) -> Optional[Account]:
        """Find an account by email or username, case-insensitively.

        Args:
            identifier: Email address or username

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account
        """
        pass
