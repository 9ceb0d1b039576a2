"""Domain value objects for AuthLink.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field, field_validator

from authlink.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    LOCAL = "local"
    GITHUB = "github"
    GOOGLE = "google"


class EmailVerificationState(str, Enum):
    """Whether an account's email has been confirmed by some provider."""

    UNVERIFIED = "unverified"
    VERIFIED = "verified"


class Username(RootValueObject[str]):
    """Local username, 1-255 characters."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


class CandidateEmail(ValueObject):
    """An email address offered by an identity provider."""

    address: str
    is_primary: bool = False
    is_verified: bool = False


class ExternalProfile(ValueObject):
    """Canonical identity data returned by an OAuth provider after consent.

    Every provider-specific profile is normalized to this shape before the
    account resolver sees it.
    """

    provider: AuthProvider
    subject_id: str = Field(min_length=1)  # Provider-scoped unique identifier
    candidate_emails: list[CandidateEmail] = Field(default_factory=list)
    display_name: str | None = None
    username_hint: str | None = None
