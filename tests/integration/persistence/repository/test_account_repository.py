"""Integration tests for PostgresAccountRepository.

Require PostgreSQL at DATABASE__URL with migrations applied.
"""

import os
from uuid import uuid4

import pytest

from authlink.domain.repository import AccountRepository
from authlink.domain.service import AccountResolver
from authlink.domain.value import AuthProvider, EmailVerificationState
from tests.conftest import email, make_account, make_credential
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class TestPostgresAccountRepository:
    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        account = make_account(email=f"{unique('a')}@x.com", username=unique("user"))

        # Act
        await repo.save(account)
        found = await repo.find_by_id(account.id)

        # Assert
        assert found is not None
        assert found.email == account.email
        assert found.email_verification == EmailVerificationState.UNVERIFIED

    @pytest.mark.asyncio
    async def test_credentials_are_appended_in_order(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        first = make_credential(AuthProvider.GITHUB, "gh")
        account = make_account(github_id=unique("gh"), linked_credentials=(first,))
        await repo.save(account)

        # Act
        second = make_credential(AuthProvider.GOOGLE, "g")
        await repo.save(
            account.model_copy(
                update={
                    "google_id": unique("g"),
                    "linked_credentials": (first, second),
                }
            )
        )
        found = await repo.find_by_id(account.id)

        # Assert
        assert [c.access_token for c in found.linked_credentials] == ["gh", "g"]

    @pytest.mark.asyncio
    async def test_find_by_provider_id(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        google_id = unique("g")
        account = make_account(google_id=google_id)
        await repo.save(account)

        assert (await repo.find_by_provider_id(AuthProvider.GOOGLE, google_id)).id == (
            account.id
        )
        assert await repo.find_by_provider_id(AuthProvider.GITHUB, google_id) is None
        assert await repo.find_by_provider_id(AuthProvider.LOCAL, google_id) is None

    @pytest.mark.asyncio
    async def test_find_by_email_or_username_ignores_case(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        username = unique("Ada")
        account = make_account(email=f"{unique('ada')}@X.com", username=username)
        await repo.save(account)

        assert (await repo.find_by_email_or_username(username.upper())).id == account.id
        assert (
            await repo.find_by_email_or_username(account.email.lower())
        ).id == account.id

    @pytest.mark.asyncio
    async def test_resolver_links_by_email(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        resolver = await integration_env.get(AccountResolver)
        address = f"{unique('link')}@x.com"
        local = make_account(email=address)
        await repo.save(local)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id=unique("gh"),
            candidate_emails=[email(address, primary=True, verified=True)],
            display_name="Linked",
            username_hint="linked",
            access_token="tok",
        )

        # Assert
        found = await repo.find_by_id(local.id)
        assert result.id == local.id
        assert found.github_id == result.github_id
        assert len(found.linked_credentials) == 1
