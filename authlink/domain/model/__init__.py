"""Domain model entities for AuthLink."""

from authlink.domain.model.account import Account, LinkedCredential

__all__ = [
    "Account",
    "LinkedCredential",
]
