"""Server-rendered pages."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from markupsafe import Markup

from authlink.domain.service.auth_service import AuthStrategyRegistry
from authlink.interface.web.buttons import render_provider_button

router = APIRouter(tags=["pages"], route_class=DishkaRoute)

_LOGIN_PAGE = Markup(
    "<!doctype html>"
    '<html lang="en"><head><meta charset="utf-8"><title>Sign in</title></head>'
    '<body><main class="login">{buttons}</main></body></html>'
)


@router.get("/login", response_class=HTMLResponse)
async def login_page(registry: FromDishka[AuthStrategyRegistry]) -> HTMLResponse:
    """Sign-in page with one button per registered OAuth provider."""
    buttons = Markup("").join(
        render_provider_button(provider, f"Sign in with {provider.value.capitalize()}")
        for provider in registry.providers
    )
    return HTMLResponse(_LOGIN_PAGE.format(buttons=buttons))
