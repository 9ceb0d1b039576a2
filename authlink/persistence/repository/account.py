"""PostgreSQL implementation of Account repository."""

from typing import Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from authlink.domain.model import Account
from authlink.domain.repository import AccountRepository
from authlink.domain.value import AccountId, AuthProvider
from authlink.persistence.mappers import (
    account_to_dict,
    linked_credential_to_dict,
    row_to_account,
)
from authlink.persistence.tables import accounts_table, linked_credentials_table

_PROVIDER_COLUMNS = {
    AuthProvider.GITHUB: accounts_table.c.github_id,
    AuthProvider.GOOGLE: accounts_table.c.google_id,
}


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        return await self._fetch_one(stmt)

    async def find_by_provider_id(
        self, provider: AuthProvider, subject_id: str
    ) -> Optional[Account]:
        column = _PROVIDER_COLUMNS.get(provider)
        if column is None:
            return None
        stmt = select(accounts_table).where(column == subject_id)
        return await self._fetch_one(stmt)

    async def find_by_emails(self, emails: Sequence[str]) -> Optional[Account]:
        if not emails:
            return None
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.email.in_(list(emails)))
            .order_by(accounts_table.c.created_at)
            .limit(1)
        )
        return await self._fetch_one(stmt)

    async def find_by_email_or_username(self, identifier: str) -> Optional[Account]:
        lowered = identifier.lower()
        stmt = (
            select(accounts_table)
            .where(
                or_(
                    func.lower(accounts_table.c.email) == lowered,
                    func.lower(accounts_table.c.username) == lowered,
                )
            )
            .order_by(accounts_table.c.created_at)
            .limit(1)
        )
        return await self._fetch_one(stmt)

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Credentials are append-only: only entries past the stored count
        are inserted.

        Args:
            account: Account to save

        Returns:
            Saved account
        """
        existing = await self.find_by_id(account.id)
        account_dict = account_to_dict(account)

        if existing:
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
            )
            stored = len(existing.linked_credentials)
        else:
            stmt = accounts_table.insert().values(**account_dict)
            stored = 0
        await self.session.execute(stmt)

        new_credentials = [
            linked_credential_to_dict(account.id, position, credential)
            for position, credential in enumerate(account.linked_credentials)
            if position >= stored
        ]
        if new_credentials:
            await self.session.execute(
                linked_credentials_table.insert(), new_credentials
            )

        await self.session.flush()
        return account

    async def _fetch_one(self, stmt) -> Optional[Account]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None

        credentials = await self.session.execute(
            select(linked_credentials_table)
            .where(linked_credentials_table.c.account_id == row["id"])
            .order_by(linked_credentials_table.c.position)
        )
        return row_to_account(
            dict(row), [dict(c) for c in credentials.mappings().all()]
        )
