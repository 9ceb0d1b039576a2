"""Account domain service."""

import logfire

from authlink.domain.error import NotFoundError, PersistenceError
from authlink.domain.model import Account
from authlink.domain.repository import AccountRepository
from authlink.domain.value import AccountId

from .base import Service


class AccountService(Service):
    """Domain service for account lookups and writes."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("Account", str(account_id))
            return account

    async def get_by_email_or_username(self, identifier: str) -> Account | None:
        """Get account by email or username (case-insensitive).

        Raises:
            PersistenceError: If the repository lookup fails
        """
        with logfire.span("account_service.get_by_email_or_username"):
            try:
                return await self.account_repository.find_by_email_or_username(
                    identifier
                )
            except Exception as e:
                logfire.error("Account lookup failed", error=str(e))
                raise PersistenceError("find_by_email_or_username", e) from e

    async def save(self, account: Account) -> Account:
        """Save account (create or update).

        Raises:
            PersistenceError: If the write fails
        """
        with logfire.span("account_service.save", account_id=str(account.id)):
            try:
                saved = await self.account_repository.save(account)
            except Exception as e:
                logfire.error(
                    "Account save failed", account_id=str(account.id), error=str(e)
                )
                raise PersistenceError("save", e) from e
            logfire.info("Account saved", account_id=str(saved.id))
            return saved
