"""Strongly typed identifiers for AuthLink domain entities."""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
