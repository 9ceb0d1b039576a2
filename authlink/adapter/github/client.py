"""GitHub OAuth 2.0 client implementation.

Implements the web application flow and reads the user's email list, which
carries the primary/verified flags used for account linking.
"""

import secrets
from collections import OrderedDict
from urllib.parse import urlencode

import httpx
import logfire
from pydantic import ValidationError

from authlink.adapter.error import ProviderError, ProviderProtocolError
from authlink.domain.service.auth_service import OAuthClient, OAuthGrant
from authlink.domain.value import AuthProvider, GitHubEmail, GitHubProfile


class GitHubOAuthError(ProviderError):
    """GitHub OAuth error."""

    pass


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.GITHUB


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth 2.0 client."""

    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_url = "https://api.github.com/user"
    emails_url = "https://api.github.com/user/emails"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: list[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_pending_states: int = 1024,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth app client ID
            client_secret: GitHub OAuth app client secret
            redirect_uri: Callback URL registered with GitHub
            scope: Requested scopes (defaults to user:email)
            transport: Optional httpx transport (tests)
            max_pending_states: Unanswered states kept before the oldest
                is dropped
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = scope or ["user:email"]
        self._transport = transport

        # States issued by initiate_authorization, oldest first (in-memory,
        # single process). Abandoned handshakes are evicted past the limit.
        self.max_pending_states = max_pending_states
        self._pending_states: OrderedDict[str, None] = OrderedDict()

    def _remember_state(self, state: str) -> None:
        self._pending_states[state] = None
        while len(self._pending_states) > self.max_pending_states:
            self._pending_states.popitem(last=False)

    async def initiate_authorization(self, state: str) -> str:
        """Build the GitHub authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._remember_state(state)

        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scope),
            "state": state,
        }

        logfire.info(
            "GitHub OAuth authorization initiated", redirect_uri=self.redirect_uri
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> OAuthGrant:
        """Exchange the code and fetch the user's profile and emails.

        Raises:
            GitHubOAuthError: If the state is unknown or a request fails
            ProviderProtocolError: If GitHub's response is missing fields
        """
        if state not in self._pending_states:
            raise GitHubOAuthError("Invalid or expired state")
        del self._pending_states[state]

        async with httpx.AsyncClient(transport=self._transport, timeout=30.0) as client:
            access_token = await self._exchange_code_for_token(client, code)
            user = await self._get_json(client, self.user_url, access_token)
            emails = await self._get_json(client, self.emails_url, access_token)

        try:
            profile = GitHubProfile(
                id=user["id"],
                login=user.get("login"),
                name=user.get("name"),
                emails=[GitHubEmail(**entry) for entry in emails],
            )
        except (KeyError, TypeError, ValidationError) as e:
            logfire.error("Malformed GitHub profile", error=str(e))
            raise ProviderProtocolError(f"Malformed GitHub profile: {e}") from e

        logfire.info("GitHub OAuth completed", github_id=str(profile.id))

        return OAuthGrant(access_token=access_token, profile=profile)

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> str:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            response = await client.post(
                self.token_url, data=data, headers={"Accept": "application/json"}
            )
        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise GitHubOAuthError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "GitHub token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"Token exchange failed: {response.status_code}")

        result = response.json()
        # GitHub reports exchange errors with a 200 and an "error" field
        if "error" in result:
            raise GitHubOAuthError(
                f"Token exchange failed: {result.get('error_description', result['error'])}"
            )
        if "access_token" not in result:
            raise ProviderProtocolError("Token response has no access_token")
        return result["access_token"]

    async def _get_json(self, client: httpx.AsyncClient, url: str, access_token: str):
        try:
            response = await client.get(
                url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
        except httpx.HTTPError as e:
            logfire.error("GitHub API HTTP error", url=url, error=str(e))
            raise GitHubOAuthError(f"HTTP error fetching {url}: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "GitHub API request failed", url=url, status_code=response.status_code
            )
            raise GitHubOAuthError(f"Request to {url} failed: {response.status_code}")

        return response.json()


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(self, profile: GitHubProfile | None = None) -> None:
        self.profile = profile or GitHubProfile(
            id=4242,
            login="mockuser",
            name="Mock GitHub User",
            emails=[
                GitHubEmail(email="mock@github.test", primary=True, verified=True),
                GitHubEmail(email="other@github.test", primary=False, verified=False),
            ],
        )

    async def initiate_authorization(self, state: str) -> str:
        return f"https://github.com/login/oauth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthGrant:
        return OAuthGrant(
            access_token=f"gho_mock_{secrets.token_hex(4)}", profile=self.profile
        )
