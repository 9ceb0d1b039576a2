"""Unit tests for AccountResolver."""

import pytest

from authlink.domain.error import PersistenceError
from authlink.domain.repository import AccountRepository
from authlink.domain.service import AccountResolver
from authlink.domain.service.account_resolver import (
    get_primary_email,
    get_verified_emails,
)
from authlink.domain.value import AuthProvider, EmailVerificationState
from authlink.persistence.repository.inmemory import InMemoryAccountRepository
from tests.conftest import email, make_account, make_credential
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class CountingRepository(InMemoryAccountRepository):
    """In-memory repository that records saves."""

    def __init__(self) -> None:
        super().__init__()
        self.saves = 0

    async def save(self, account):
        self.saves += 1
        return await super().save(account)


class BrokenRepository(InMemoryAccountRepository):
    """Repository whose given operation raises."""

    def __init__(self, failing: str) -> None:
        super().__init__()
        self.failing = failing
        self.error = ConnectionError("database unavailable")

    async def find_by_provider_id(self, provider, subject_id):
        if self.failing == "find_by_provider_id":
            raise self.error
        return await super().find_by_provider_id(provider, subject_id)

    async def find_by_emails(self, emails):
        if self.failing == "find_by_emails":
            raise self.error
        return await super().find_by_emails(emails)

    async def save(self, account):
        if self.failing == "save":
            raise self.error
        return await super().save(account)


class TestEmailHelpers:
    """Tests for get_verified_emails and get_primary_email."""

    def test_verified_emails_keep_order_and_drop_unverified(self):
        candidates = [
            email("a@x.com", verified=True),
            email("b@x.com"),
            email("c@x.com", verified=True),
        ]

        assert get_verified_emails(candidates) == ["a@x.com", "c@x.com"]

    def test_verified_emails_of_none_is_empty(self):
        assert get_verified_emails(None) == []

    def test_primary_email_is_first_primary(self):
        candidates = [email("a@x.com"), email("b@x.com", primary=True)]

        assert get_primary_email(candidates) == "b@x.com"

    @pytest.mark.parametrize("candidates", [None, [], [email("a@x.com")]])
    def test_primary_email_absent(self, candidates):
        assert get_primary_email(candidates) is None

    def test_primary_email_need_not_be_verified(self):
        assert get_primary_email([email("a@x.com", primary=True)]) == "a@x.com"


class TestResolveExistingLink:
    """An account already linked to the subject id is returned untouched."""

    @pytest.mark.asyncio
    async def test_returns_linked_account_without_write(self):
        # Arrange
        repo = CountingRepository()
        account = make_account(
            email="old@x.com",
            github_id="42",
            linked_credentials=(make_credential(AuthProvider.GITHUB, "first"),),
            email_verification=EmailVerificationState.VERIFIED,
        )
        await repo.save(account)
        repo.saves = 0
        resolver = AccountResolver(repo)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="42",
            candidate_emails=[email("new@x.com", primary=True, verified=True)],
            display_name="New Name",
            username_hint="newlogin",
            access_token="second",
        )

        # Assert
        assert result == account
        assert result.email == "old@x.com"
        assert len(result.linked_credentials) == 1
        assert repo.saves == 0

    @pytest.mark.asyncio
    async def test_subject_ids_are_scoped_by_provider(self, unit_env):
        # Arrange - same id at GitHub does not match a Google login
        resolver = await unit_env.get(AccountResolver)
        repo = await unit_env.get(AccountRepository)
        github_account = make_account(github_id="42")
        await repo.save(github_account)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GOOGLE,
            subject_id="42",
            candidate_emails=[],
            display_name=None,
            username_hint=None,
            access_token="tok",
        )

        # Assert
        assert result.id != github_account.id
        assert result.google_id == "42"


class TestResolveLinkByEmail:
    """An account owning a verified email gets the identity attached."""

    @pytest.mark.asyncio
    async def test_links_github_to_local_account(self, unit_env):
        # Arrange
        resolver = await unit_env.get(AccountResolver)
        repo = await unit_env.get(AccountRepository)
        local = make_account(email="a@x.com")
        await repo.save(local)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="77",
            candidate_emails=[
                email("a@x.com", primary=True, verified=True),
                email("b@x.com"),
            ],
            display_name="Ada",
            username_hint="ada",
            access_token="T",
        )

        # Assert
        assert result.id == local.id
        assert result.email == "a@x.com"
        assert result.github_id == "77"
        assert result.username == "ada"
        assert result.name == "Ada"
        assert [(c.provider, c.access_token) for c in result.linked_credentials] == [
            (AuthProvider.GITHUB, "T")
        ]
        assert result.email_verification == EmailVerificationState.VERIFIED
        assert await repo.find_by_id(local.id) == result

    @pytest.mark.asyncio
    async def test_existing_fields_are_not_overwritten(self, unit_env):
        # Arrange
        resolver = await unit_env.get(AccountResolver)
        repo = await unit_env.get(AccountRepository)
        local = make_account(email="a@x.com", username="keep", name="Keep Me")
        await repo.save(local)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="77",
            candidate_emails=[
                email("other@x.com", primary=True, verified=True),
                email("a@x.com", verified=True),
            ],
            display_name="Other",
            username_hint="other",
            access_token="T",
        )

        # Assert
        assert result.id == local.id
        assert result.email == "a@x.com"
        assert result.username == "keep"
        assert result.name == "Keep Me"

    @pytest.mark.asyncio
    async def test_second_provider_appends_credential(self, unit_env):
        # Arrange - account already linked to GitHub
        resolver = await unit_env.get(AccountResolver)
        repo = await unit_env.get(AccountRepository)
        first = make_credential(AuthProvider.GITHUB, "gh-token")
        account = make_account(
            email="a@x.com",
            github_id="77",
            linked_credentials=(first,),
            email_verification=EmailVerificationState.VERIFIED,
        )
        await repo.save(account)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GOOGLE,
            subject_id="g-1",
            candidate_emails=[email("a@x.com", primary=True, verified=True)],
            display_name="Ada G",
            username_hint="a@x.com",
            access_token="g-token",
        )

        # Assert
        assert result.id == account.id
        assert result.github_id == "77"
        assert result.google_id == "g-1"
        assert result.linked_credentials[0] == first
        assert [c.access_token for c in result.linked_credentials] == [
            "gh-token",
            "g-token",
        ]

    @pytest.mark.asyncio
    async def test_unverified_email_does_not_link(self, unit_env):
        # Arrange
        resolver = await unit_env.get(AccountResolver)
        repo = await unit_env.get(AccountRepository)
        local = make_account(email="a@x.com")
        await repo.save(local)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="77",
            candidate_emails=[email("a@x.com", primary=True, verified=False)],
            display_name=None,
            username_hint="ada",
            access_token="T",
        )

        # Assert - a new account; the local one is untouched
        assert result.id != local.id
        assert (await repo.find_by_id(local.id)).github_id is None

    @pytest.mark.asyncio
    async def test_empty_email_filled_with_primary(self):
        # Arrange - email lookup matched, account has no email of its own
        class MatchAnything(InMemoryAccountRepository):
            async def find_by_emails(self, emails):
                return next(iter(self._accounts.values()), None)

        repo = MatchAnything()
        anonymous = make_account(username="anon")
        await repo.save(anonymous)
        resolver = AccountResolver(repo)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="1",
            candidate_emails=[email("p@x.com", primary=True, verified=True)],
            display_name=None,
            username_hint="ignored",
            access_token="T",
        )

        # Assert
        assert result.email == "p@x.com"
        assert result.username == "anon"


class TestResolveCreate:
    """No match creates a new verified account."""

    @pytest.mark.asyncio
    async def test_creates_account_from_github_profile(self):
        # Arrange
        repo = CountingRepository()
        resolver = AccountResolver(repo)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="9",
            candidate_emails=[email("n@x.com", primary=True, verified=True)],
            display_name="Neo",
            username_hint="neo",
            access_token="T",
        )

        # Assert
        assert result.email == "n@x.com"
        assert result.github_id == "9"
        assert result.google_id is None
        assert result.username == "neo"
        assert result.name == "Neo"
        assert [(c.provider, c.access_token) for c in result.linked_credentials] == [
            (AuthProvider.GITHUB, "T")
        ]
        assert result.email_verification == EmailVerificationState.VERIFIED
        assert repo.saves == 1

    @pytest.mark.asyncio
    async def test_creates_account_without_email(self, unit_env):
        # Arrange
        resolver = await unit_env.get(AccountResolver)

        # Act
        result = await resolver.resolve(
            provider=AuthProvider.GITHUB,
            subject_id="9",
            candidate_emails=[email("n@x.com", verified=True)],
            display_name=None,
            username_hint="neo",
            access_token="T",
        )

        # Assert - verified but not primary: nothing to store as email
        assert result.email is None
        assert result.github_id == "9"

    @pytest.mark.asyncio
    async def test_second_login_returns_created_account(self, unit_env):
        # Arrange
        resolver = await unit_env.get(AccountResolver)
        kwargs = dict(
            provider=AuthProvider.GOOGLE,
            subject_id="g-9",
            candidate_emails=[email("n@gmail.com", primary=True, verified=True)],
            display_name="Neo",
            username_hint="n@gmail.com",
        )
        created = await resolver.resolve(access_token="first", **kwargs)

        # Act
        again = await resolver.resolve(access_token="second", **kwargs)

        # Assert
        assert again.id == created.id
        assert len(again.linked_credentials) == 1

    @pytest.mark.asyncio
    async def test_local_provider_cannot_be_resolved(self, unit_env):
        resolver = await unit_env.get(AccountResolver)

        with pytest.raises(ValueError, match="cannot be linked"):
            await resolver.resolve(
                provider=AuthProvider.LOCAL,
                subject_id="x",
                candidate_emails=[],
                display_name=None,
                username_hint=None,
                access_token="T",
            )


class TestResolvePersistenceFailure:
    """Repository failures surface as PersistenceError with the cause."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failing", ["find_by_provider_id", "find_by_emails", "save"]
    )
    async def test_wraps_repository_error(self, failing):
        # Arrange
        repo = BrokenRepository(failing)
        resolver = AccountResolver(repo)

        # Act & Assert
        with pytest.raises(PersistenceError) as exc_info:
            await resolver.resolve(
                provider=AuthProvider.GITHUB,
                subject_id="1",
                candidate_emails=[email("a@x.com", primary=True, verified=True)],
                display_name=None,
                username_hint=None,
                access_token="T",
            )

        assert exc_info.value.cause is repo.error
        assert exc_info.value.__cause__ is repo.error
        assert exc_info.value.operation == failing
