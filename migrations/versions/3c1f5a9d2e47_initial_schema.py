"""initial_schema

Create the schema for AuthLink:
- Accounts (local credentials plus linked GitHub / Google identities)
- Linked credentials (append-only record of each provider linkage)

Revision ID: 3c1f5a9d2e47
Revises:
Create Date: 2026-10-19 10:12:44.381205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f5a9d2e47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("github_id", sa.String(255), nullable=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column(
            "email_verification",
            sa.String(20),
            nullable=False,
            server_default="unverified",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        # Concurrent first logins for the same identity cannot both insert
        sa.UniqueConstraint("email", name="uq_accounts_email"),
        sa.UniqueConstraint("github_id", name="uq_accounts_github_id"),
        sa.UniqueConstraint("google_id", name="uq_accounts_google_id"),
        sa.CheckConstraint(
            "email_verification IN ('unverified', 'verified')",
            name="ck_accounts_email_verification",
        ),
    )
    op.create_index(
        "idx_accounts_email_lower", "accounts", [sa.text("lower(email)")]
    )
    op.create_index(
        "idx_accounts_username_lower", "accounts", [sa.text("lower(username)")]
    )

    # ========================================================================
    # LINKED_CREDENTIALS table (append-only)
    # ========================================================================
    op.create_table(
        "linked_credentials",
        sa.Column("account_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),  # 'github', 'google'
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column(
            "linked_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("account_id", "position"),
    )

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_accounts_updated_at
        BEFORE UPDATE ON accounts
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_accounts_updated_at ON accounts")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_table("linked_credentials")
    op.drop_index("idx_accounts_username_lower", table_name="accounts")
    op.drop_index("idx_accounts_email_lower", table_name="accounts")
    op.drop_table("accounts")
