"""In-memory account repository for testing."""

from typing import Optional, Sequence

from authlink.domain.model import Account
from authlink.domain.repository import AccountRepository
from authlink.domain.value import AccountId, AuthProvider


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        return self._accounts.get(account_id)

    async def find_by_provider_id(
        self, provider: AuthProvider, subject_id: str
    ) -> Optional[Account]:
        if provider == AuthProvider.LOCAL:
            return None
        for account in self._accounts.values():
            if account.provider_id(provider) == subject_id:
                return account
        return None

    async def find_by_emails(self, emails: Sequence[str]) -> Optional[Account]:
        for account in self._accounts.values():
            if account.email and account.email in emails:
                return account
        return None

    async def find_by_email_or_username(self, identifier: str) -> Optional[Account]:
        lowered = identifier.lower()
        for account in self._accounts.values():
            if (account.email and account.email.lower() == lowered) or (
                account.username and account.username.lower() == lowered
            ):
                return account
        return None

    async def save(self, account: Account) -> Account:
        self._accounts[account.id] = account
        return account
