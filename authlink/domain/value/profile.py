"""Provider-specific profile shapes and their normalization.

Each OAuth provider returns user data in its own layout. Adapters parse that
data into one of the tagged profiles below, and ``normalize_profile`` turns
any of them into an ``ExternalProfile``.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from authlink.domain.value.common import ValueObject
from authlink.domain.value.types import AuthProvider, CandidateEmail, ExternalProfile


class GitHubEmail(ValueObject):
    """Entry from GitHub's ``GET /user/emails``."""

    email: str
    primary: bool = False
    verified: bool = False


class GitHubProfile(ValueObject):
    """GitHub user as returned by ``GET /user`` plus its email list."""

    provider: Literal[AuthProvider.GITHUB] = AuthProvider.GITHUB
    id: int | str
    login: str | None = None
    name: str | None = None
    emails: list[GitHubEmail] = Field(default_factory=list)


class GoogleProfile(ValueObject):
    """Google OpenID Connect userinfo claims."""

    provider: Literal[AuthProvider.GOOGLE] = AuthProvider.GOOGLE
    sub: str
    email: str
    email_verified: bool = True
    name: str | None = None


ProviderProfile = Annotated[
    Union[GitHubProfile, GoogleProfile], Field(discriminator="provider")
]


def normalize_profile(profile: GitHubProfile | GoogleProfile) -> ExternalProfile:
    """Convert a provider-specific profile to the canonical ExternalProfile.

    Args:
        profile: Parsed provider profile

    Returns:
        Normalized external profile

    Raises:
        TypeError: If the profile type is not a known provider profile
    """
    if isinstance(profile, GitHubProfile):
        return ExternalProfile(
            provider=AuthProvider.GITHUB,
            subject_id=str(profile.id),
            candidate_emails=[
                CandidateEmail(
                    address=entry.email,
                    is_primary=entry.primary,
                    is_verified=entry.verified,
                )
                for entry in profile.emails
            ],
            display_name=profile.name,
            username_hint=profile.login,
        )

    if isinstance(profile, GoogleProfile):
        # Google supplies a single address; it is both primary and the
        # username hint.
        return ExternalProfile(
            provider=AuthProvider.GOOGLE,
            subject_id=profile.sub,
            candidate_emails=[
                CandidateEmail(
                    address=profile.email,
                    is_primary=True,
                    is_verified=profile.email_verified,
                )
            ],
            display_name=profile.name,
            username_hint=profile.email,
        )

    raise TypeError(f"Unsupported profile type: {type(profile).__name__}")
