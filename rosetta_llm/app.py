"""FastAPI application entry point."""

import logging
import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rosetta_llm.api.routers import api_router
from rosetta_llm.config.settings import Settings, get_settings
from rosetta_llm.infrastructure.llm.registry import registered_providers
from rosetta_llm.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Warn about fallback configuration that cannot work."""
    if settings.default_provider not in registered_providers():
        logger.warning(
            "default_provider %r is not registered (known: %s)",
            settings.default_provider,
            ", ".join(registered_providers()),
        )
    elif settings.default_provider == "claude_cli" and shutil.which(settings.claude_cli_path) is None:
        logger.warning(
            "Claude CLI %r not found on PATH; the model fallback will be skipped",
            settings.claude_cli_path,
        )
    elif settings.default_provider == "anthropic" and not settings.anthropic_api_key:
        logger.warning("anthropic_api_key is empty; the model fallback will be skipped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    _validate_startup_config(settings)
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="Prose to AISP notation conversion with a confidence-gated LLM fallback",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")
