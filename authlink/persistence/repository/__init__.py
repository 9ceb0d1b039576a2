"""PostgreSQL repository implementations."""

from authlink.persistence.repository.account import PostgresAccountRepository

__all__ = [
    "PostgresAccountRepository",
]
