"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from authlink.adapter.error import ProviderError
from authlink.application.usecase.auth import (
    AuthResult,
    GetCurrentAccountUseCase,
    LocalLoginUseCase,
    OAuthLoginUseCase,
    SignupUseCase,
)
from authlink.application.usecase.auth.get_current_account import (
    AccountView,
    GetCurrentAccountRequest,
)
from authlink.application.usecase.auth.local_login import LocalLoginRequest
from authlink.application.usecase.auth.oauth_login import OAuthLoginRequest
from authlink.application.usecase.auth.signup import SignupRequest
from authlink.config import Settings
from authlink.domain.error import NotFoundError, ValidationError
from authlink.domain.service import AuthService
from authlink.domain.value import AuthProvider
from authlink.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

AUTH_FAILED = "Authentication failed."


class LoginResponse(BaseModel):
    """Successful local login or sign-up."""

    account: AccountView


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return the current account if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    account: AccountView | None = None


def _cookie_settings(settings: Settings) -> dict:
    """Cookie attributes shared by login and logout.

    Production serves the frontend from another origin, which needs
    samesite=none and therefore secure cookies.
    """
    is_production = settings.environment == "production"
    return {
        "secure": is_production,
        "samesite": "none" if is_production else "lax",
        "path": "/",
    }


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
        **_cookie_settings(settings),
    )


def _error_redirect(settings: Settings) -> RedirectResponse:
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?error=auth_failed",
        status_code=status.HTTP_302_FOUND,
    )


async def _initiate(provider: AuthProvider, auth_service: AuthService) -> RedirectResponse:
    logger.info(f"Initiating {provider.value} login")

    state = secrets.token_urlsafe(32)
    try:
        auth_url = await auth_service.initiate_login(provider, state)
    except ProviderError as e:
        logger.error(f"Failed to initiate {provider.value} login: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to initiate {provider.value} login",
        )

    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/github/")
async def github_login(auth_service: FromDishka[AuthService]) -> RedirectResponse:
    """Start the GitHub handshake (redirects to github.com)."""
    return await _initiate(AuthProvider.GITHUB, auth_service)


@router.get("/google/")
async def google_login(auth_service: FromDishka[AuthService]) -> RedirectResponse:
    """Start the Google handshake (redirects to accounts.google.com)."""
    return await _initiate(AuthProvider.GOOGLE, auth_service)


@router.get("/github/callback")
async def github_callback(
    code: str,
    state: str,
    login_use_case: FromDishka[OAuthLoginUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Handle GitHub OAuth callback and complete login.

    Example:
        GET /auth/github/callback?code=abc123&state=xyz789

        Redirects to the frontend and sets the auth_token cookie.
    """
    return await _handle_oauth_callback(
        AuthProvider.GITHUB, code, state, login_use_case, settings
    )


@router.get("/google/callback")
async def google_callback(
    code: str,
    state: str,
    login_use_case: FromDishka[OAuthLoginUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Handle Google OAuth callback and complete login."""
    return await _handle_oauth_callback(
        AuthProvider.GOOGLE, code, state, login_use_case, settings
    )


async def _handle_oauth_callback(
    provider: AuthProvider,
    code: str,
    state: str,
    login_use_case: OAuthLoginUseCase,
    settings: Settings,
) -> RedirectResponse:
    """Shared OAuth callback handler for all providers.

    Every failure sends the browser to the frontend error page with the same
    generic error code; the reason is only logged.
    """
    logger.info(f"OAuth callback received: provider={provider.value}")

    try:
        result = await login_use_case.execute(
            OAuthLoginRequest(provider=provider, code=code, state=state)
        )
    except ProviderError as e:
        logger.error(f"{provider.value} OAuth error during callback: {e}")
        return _error_redirect(settings)
    except Exception as e:
        logger.exception(f"Unexpected error during OAuth callback: {e}")
        return _error_redirect(settings)

    if not result.ok:
        logger.warning(
            f"{provider.value} login failed: {result.failure.kind.value}"
        )
        return _error_redirect(settings)

    # Cookies must be set on the returned RedirectResponse itself
    redirect_response = RedirectResponse(
        url=settings.api.frontend_url, status_code=status.HTTP_302_FOUND
    )
    _set_session_cookie(redirect_response, result.token, settings)
    logger.info(f"Login successful for account {result.account.id}")
    return redirect_response


def _login_response(
    result: AuthResult, response: Response, settings: Settings
) -> LoginResponse:
    if not result.ok:
        logger.warning(f"Local sign-in failed: {result.failure.kind.value}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_FAILED)

    _set_session_cookie(response, result.token, settings)
    return LoginResponse(account=AccountView.from_account(result.account))


@router.post("/login", response_model=LoginResponse)
async def local_login(
    request: LocalLoginRequest,
    response: Response,
    login_use_case: FromDishka[LocalLoginUseCase],
    settings: FromDishka[Settings],
) -> LoginResponse:
    """Sign in with email (or username) and password.

    Returns 401 with a generic message whether the account is missing or the
    password is wrong.

    Example:
        POST /auth/login
        {
            "email": "ada@example.com",
            "password": "correct horse battery staple"
        }
    """
    result = await login_use_case.execute(request)
    return _login_response(result, response, settings)


@router.post(
    "/signup", response_model=LoginResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignupRequest,
    response: Response,
    signup_use_case: FromDishka[SignupUseCase],
    settings: FromDishka[Settings],
) -> LoginResponse:
    """Create a local account and sign it in.

    Raises:
        HTTPException: 409 if the email or username is already taken
    """
    try:
        result = await signup_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return _login_response(result, response, settings)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout by clearing the authentication cookie."""
    cookie = _cookie_settings(settings)
    response.delete_cookie(
        key=settings.auth.cookie_name,
        path=cookie["path"],
        secure=cookie["secure"],
        samesite=cookie["samesite"],
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_account(
    request: Request,
    get_current_account_use_case: FromDishka[GetCurrentAccountUseCase],
    settings: FromDishka[Settings],
) -> AuthStatusResponse:
    """Get current account if authenticated, or return unauthenticated status.

    Safe to call without a cookie: returns authenticated=false instead of
    raising an error.
    """
    auth_token = request.cookies.get(settings.auth.cookie_name)
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        account = await get_current_account_use_case.execute(
            GetCurrentAccountRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, account=account)

    except JWTError:
        # Invalid or expired token
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # Token valid but account gone
        return AuthStatusResponse(authenticated=False)
