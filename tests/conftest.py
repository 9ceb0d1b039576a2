"""Test configuration and fixtures."""

import os
from datetime import datetime, timezone
from uuid import uuid4

# Settings are read from the environment when the container is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-with-enough-bytes-for-hs256")

import logfire  # noqa: E402

from authlink.domain.model import Account, LinkedCredential  # noqa: E402
from authlink.domain.value import (  # noqa: E402
    AccountId,
    AuthProvider,
    CandidateEmail,
    EmailVerificationState,
)

logfire.configure(send_to_logfire=False, console=False)


def make_account(**overrides) -> Account:
    """Helper to build an account with sensible defaults.

    Args:
        **overrides: Account fields to set

    Returns:
        Unverified account with no linked providers unless overridden
    """
    now = datetime.now(timezone.utc)
    fields = {
        "id": AccountId(uuid4()),
        "email": None,
        "username": None,
        "name": None,
        "email_verification": EmailVerificationState.UNVERIFIED,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Account(**fields)


def make_credential(provider: AuthProvider, access_token: str) -> LinkedCredential:
    return LinkedCredential(
        provider=provider,
        access_token=access_token,
        linked_at=datetime.now(timezone.utc),
    )


def email(address: str, primary: bool = False, verified: bool = False) -> CandidateEmail:
    """Shorthand for a candidate email."""
    return CandidateEmail(address=address, is_primary=primary, is_verified=verified)
