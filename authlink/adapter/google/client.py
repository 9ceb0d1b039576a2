"""Google OAuth 2.0 / OpenID Connect client implementation."""

import secrets
from collections import OrderedDict
from urllib.parse import urlencode

import httpx
import logfire
from pydantic import ValidationError

from authlink.adapter.error import ProviderError, ProviderProtocolError
from authlink.domain.service.auth_service import OAuthClient, OAuthGrant
from authlink.domain.value import AuthProvider, GoogleProfile


class GoogleOAuthError(ProviderError):
    """Google OAuth error."""

    pass


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.GOOGLE


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth 2.0 authorization code client."""

    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    userinfo_url = "https://openidconnect.googleapis.com/v1/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: list[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_pending_states: int = 1024,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            scope: Requested scopes (defaults to openid email profile)
            transport: Optional httpx transport (tests)
            max_pending_states: Unanswered states kept before the oldest
                is dropped
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = scope or ["openid", "email", "profile"]
        self._transport = transport
        self.max_pending_states = max_pending_states
        self._pending_states: OrderedDict[str, None] = OrderedDict()

    def _remember_state(self, state: str) -> None:
        self._pending_states[state] = None
        while len(self._pending_states) > self.max_pending_states:
            self._pending_states.popitem(last=False)

    async def initiate_authorization(self, state: str) -> str:
        self._remember_state(state)

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scope),
            "state": state,
            "access_type": "offline",
        }

        logfire.info(
            "Google OAuth authorization initiated", redirect_uri=self.redirect_uri
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> OAuthGrant:
        """Exchange the code and fetch the OpenID Connect userinfo.

        Raises:
            GoogleOAuthError: If the state is unknown or a request fails
            ProviderProtocolError: If Google's response is missing fields
        """
        if state not in self._pending_states:
            raise GoogleOAuthError("Invalid or expired state")
        del self._pending_states[state]

        async with httpx.AsyncClient(transport=self._transport, timeout=30.0) as client:
            tokens = await self._exchange_code_for_token(client, code)
            userinfo = await self._get_userinfo(client, tokens["access_token"])

        try:
            profile = GoogleProfile(
                sub=userinfo["sub"],
                email=userinfo["email"],
                email_verified=userinfo.get("email_verified", True),
                name=userinfo.get("name"),
            )
        except (KeyError, TypeError, ValidationError) as e:
            logfire.error("Malformed Google profile", error=str(e))
            raise ProviderProtocolError(f"Malformed Google profile: {e}") from e

        logfire.info("Google OAuth completed", google_sub=profile.sub)

        return OAuthGrant(
            access_token=tokens["access_token"],
            refresh_token=tokens.get("refresh_token"),
            profile=profile,
        )

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> dict:
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            response = await client.post(self.token_url, data=data)
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"Token exchange failed: {response.status_code}")

        result = response.json()
        if "access_token" not in result:
            raise ProviderProtocolError("Token response has no access_token")
        return result

    async def _get_userinfo(self, client: httpx.AsyncClient, access_token: str) -> dict:
        try:
            response = await client.get(
                self.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logfire.error("Google userinfo HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error fetching userinfo: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "Google userinfo request failed", status_code=response.status_code
            )
            raise GoogleOAuthError(
                f"Userinfo request failed: {response.status_code}"
            )

        return response.json()


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing."""

    def __init__(self, profile: GoogleProfile | None = None) -> None:
        self.profile = profile or GoogleProfile(
            sub="108000000000000000001",
            email="mock@gmail.test",
            email_verified=True,
            name="Mock Google User",
        )

    async def initiate_authorization(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthGrant:
        return OAuthGrant(
            access_token=f"ya29.mock_{secrets.token_hex(4)}",
            refresh_token="mock_refresh",
            profile=self.profile,
        )
