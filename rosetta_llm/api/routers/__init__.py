"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter, Depends

from rosetta_llm.api.dependencies import get_settings_dependency
from rosetta_llm.api.models import HealthResponse
from rosetta_llm.api.routers.convert import router as convert_router
from rosetta_llm.api.routers.symbols import router as symbols_router
from rosetta_llm.config.settings import Settings

api_router = APIRouter()

api_router.include_router(convert_router, tags=["convert"])
api_router.include_router(symbols_router, tags=["symbols"])


@api_router.get("/health", response_model=HealthResponse, tags=["health"])
async def health(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=settings.app_version)
