"""SQLAlchemy table definitions for AuthLink.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=True, unique=True),
    Column("username", String(255), nullable=True),
    Column("name", String(255), nullable=True),
    # At most one account per external identity
    Column("github_id", String(255), nullable=True, unique=True),
    Column("google_id", String(255), nullable=True, unique=True),
    Column("password_hash", Text, nullable=True),
    Column(
        "email_verification",
        String(20),
        nullable=False,
        server_default="unverified",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_email_lower", func.lower(accounts_table.c.email))
Index("idx_accounts_username_lower", func.lower(accounts_table.c.username))

# ============================================================================
# LINKED CREDENTIALS TABLE (append-only)
# ============================================================================
linked_credentials_table = Table(
    "linked_credentials",
    metadata,
    Column(
        "account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("position", Integer, primary_key=True),  # Order of linkage
    Column("provider", String(50), nullable=False),  # 'github', 'google'
    Column("access_token", Text, nullable=False),
    Column(
        "linked_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
