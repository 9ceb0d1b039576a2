"""Domain services."""

from .account_resolver import AccountResolver, get_primary_email, get_verified_emails
from .account_service import AccountService
from .auth_service import (
    AuthService,
    AuthStrategy,
    AuthStrategyRegistry,
    OAuthClient,
    OAuthGrant,
)
from .base import Service
from .credential_service import CredentialService
from .jwt_service import JWTService

__all__ = [
    "AccountResolver",
    "AccountService",
    "AuthService",
    "AuthStrategy",
    "AuthStrategyRegistry",
    "CredentialService",
    "JWTService",
    "OAuthClient",
    "OAuthGrant",
    "Service",
    "get_primary_email",
    "get_verified_emails",
]
