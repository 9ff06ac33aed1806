"""Feedback Collector - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedback_collector.api import auth_router, feedback_router, health_router, rooms_router
from feedback_collector.api.exception_handlers import setup_exception_handlers
from feedback_collector.core import Settings, engine, get_settings, setup_logging
from feedback_collector.core.logging import get_logger
from feedback_collector.middleware import RequestAuthenticator, SecurityHeadersMiddleware
from feedback_collector.services.credentials import CredentialStore, HashingConfig
from feedback_collector.services.tokens import TokenConfig, TokenService

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config: Settings = app.state.settings
    setup_logging(level=config.log_level, format_type=config.log_format)
    logger.info(f"Starting {config.app_name} v{config.app_version}")

    for warning in config.check_security_configuration():
        logger.warning(f"SECURITY: {warning}")

    yield

    logger.info("Shutting down...")
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    All security components are built here, once, from the given settings
    and shared read-only by every request.
    """
    config = settings or get_settings()

    app = FastAPI(
        title=config.app_name,
        description="Feedback rooms with token-authenticated creators and secret-gated access",
        version=config.app_version,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
        openapi_url="/openapi.json" if config.debug else None,
    )

    credentials = CredentialStore(HashingConfig.from_settings(config))
    tokens = TokenService(TokenConfig.from_settings(config))
    app.state.settings = config
    app.state.credentials = credentials
    app.state.tokens = tokens
    app.state.authenticator = RequestAuthenticator(tokens)

    app.add_middleware(SecurityHeadersMiddleware)

    # CORS must be outermost so headers are present on 401 responses too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(rooms_router)
    app.include_router(feedback_router)

    return app


# Application instance
app = create_app()
