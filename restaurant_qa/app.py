"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from restaurant_qa.api.router import router
from restaurant_qa.config.settings import Settings, get_settings
from restaurant_qa.infrastructure.llm.factory import is_anthropic_model
from restaurant_qa.infrastructure.logging.logger import setup_logging
from restaurant_qa.orchestrator.pipeline import PipelineOrchestrator

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Warn about configuration that will fail at request time."""
    if not settings.neo4j_password:
        logger.warning("neo4j_password is empty - graph queries will likely be rejected")
    models = (settings.coder_model, settings.nlp_model)
    if any(is_anthropic_model(m) for m in models) and not settings.anthropic_api_key:
        logger.warning("A claude model is configured but anthropic_api_key is empty")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. The orchestrator is created on startup."""
    settings = settings or get_settings()

    setup_logging(
        level=settings.log_level,
        json_output=not settings.debug,
        silence_noisy_loggers=True,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup and shutdown lifecycle."""
        logger.info(f"Starting {settings.app_name}")
        _validate_startup_config(settings)
        app.state.orchestrator = await PipelineOrchestrator.from_settings(settings)
        yield
        logger.info(f"Shutting down {settings.app_name}")
        await app.state.orchestrator.close()

    app = FastAPI(
        title=settings.app_name,
        description="Natural language questions over a restaurant graph database",
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

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})

    app.include_router(router)
    return app
