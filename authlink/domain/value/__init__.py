"""Domain value objects for AuthLink."""

from authlink.domain.value.identifiers import AccountId
from authlink.domain.value.profile import (
    GitHubEmail,
    GitHubProfile,
    GoogleProfile,
    ProviderProfile,
    normalize_profile,
)
from authlink.domain.value.types import (
    AuthProvider,
    CandidateEmail,
    EmailVerificationState,
    ExternalProfile,
    Username,
)

__all__ = [
    # Identifiers
    "AccountId",
    # Types
    "AuthProvider",
    "CandidateEmail",
    "EmailVerificationState",
    "ExternalProfile",
    "Username",
    # Provider profiles
    "GitHubEmail",
    "GitHubProfile",
    "GoogleProfile",
    "ProviderProfile",
    "normalize_profile",
]
