"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from authlink.config import Settings
from authlink.domain.service.auth_service import AuthStrategyRegistry

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    providers: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    registry: FromDishka[AuthStrategyRegistry],
) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status and the OAuth providers registered at startup
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        environment=settings.environment,
        providers=[provider.value for provider in registry.providers],
    )
