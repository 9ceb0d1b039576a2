"""Mappers between database rows and domain models.

Domain models are immutable pydantic models, so mapping is done by hand.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from authlink.domain.model import Account, LinkedCredential
from authlink.domain.value import AccountId, AuthProvider, EmailVerificationState


def row_to_linked_credential(row: Dict[str, Any]) -> LinkedCredential:
    return LinkedCredential(
        provider=AuthProvider(row["provider"]),
        access_token=row["access_token"],
        linked_at=row["linked_at"],
    )


def row_to_account(
    row: Dict[str, Any], credential_rows: Sequence[Dict[str, Any]] = ()
) -> Account:
    """Convert an accounts row and its credential rows to an Account.

    Args:
        row: accounts row as dict
        credential_rows: linked_credentials rows ordered by position

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        email=row.get("email"),
        username=row.get("username"),
        name=row.get("name"),
        github_id=row.get("github_id"),
        google_id=row.get("google_id"),
        password_hash=row.get("password_hash"),
        email_verification=EmailVerificationState(row["email_verification"]),
        linked_credentials=tuple(
            row_to_linked_credential(c) for c in credential_rows
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account to an accounts row dict (credentials excluded)."""
    return {
        "id": account.id,
        "email": account.email,
        "username": account.username,
        "name": account.name,
        "github_id": account.github_id,
        "google_id": account.google_id,
        "password_hash": account.password_hash,
        "email_verification": account.email_verification.value,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }


def linked_credential_to_dict(
    account_id: AccountId, position: int, credential: LinkedCredential
) -> Dict[str, Any]:
    return {
        "account_id": account_id,
        "position": position,
        "provider": credential.provider.value,
        "access_token": credential.access_token,
        "linked_at": credential.linked_at,
    }
