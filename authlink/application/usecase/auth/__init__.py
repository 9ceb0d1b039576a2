"""Authentication use cases."""

from .get_current_account import GetCurrentAccountUseCase
from .local_login import LocalLoginUseCase
from .oauth_login import OAuthLoginUseCase
from .result import AuthFailure, AuthFailureKind, AuthResult
from .signup import SignupUseCase

__all__ = [
    "AuthFailure",
    "AuthFailureKind",
    "AuthResult",
    "GetCurrentAccountUseCase",
    "LocalLoginUseCase",
    "OAuthLoginUseCase",
    "SignupUseCase",
]
