"""Outcome of a sign-in attempt."""

from enum import Enum

from pydantic import BaseModel

from authlink.domain.model import Account


class AuthFailureKind(str, Enum):
    """Why a sign-in attempt failed (kept internally, never shown to users)."""

    NOT_FOUND = "not_found"
    INVALID_CREDENTIAL = "invalid_credential"
    PERSISTENCE_FAILURE = "persistence_failure"


class AuthFailure(BaseModel):
    """A failed sign-in attempt."""

    kind: AuthFailureKind
    message: str


class AuthResult(BaseModel):
    """Either an authenticated account with its session token, or a failure."""

    account: Account | None = None
    token: str | None = None
    failure: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def succeeded(cls, account: Account, token: str) -> "AuthResult":
        return cls(account=account, token=token)

    @classmethod
    def failed(cls, kind: AuthFailureKind, message: str) -> "AuthResult":
        return cls(failure=AuthFailure(kind=kind, message=message))
