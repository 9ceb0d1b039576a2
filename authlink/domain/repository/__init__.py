"""Repository interfaces for the AuthLink domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from authlink.domain.repository.account import AccountRepository

__all__ = [
    "AccountRepository",
]
