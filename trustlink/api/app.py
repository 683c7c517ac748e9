"""FastAPI application factory.

Creates and configures the service application with middleware,
exception handlers, a lifespan that builds the backends, and the
routers enabled in `api.services`.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trustlink import __version__
from trustlink.api.container import ServiceContainer
from trustlink.api.handlers import register_exception_handlers
from trustlink.api.middleware.context import RequestContextMiddleware
from trustlink.api.routes import register_routes
from trustlink.config import get_settings
from trustlink.config.settings import Settings
from trustlink.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from config files when omitted
        container: Prebuilt services; built in the lifespan when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(log_config.level, log_config.format, log_config.redact_pii)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "container", None) is None
        if owned:
            app.state.container = await ServiceContainer.build(settings)
        logger.info("app_started", services=settings.api.services)
        try:
            yield
        finally:
            if owned:
                await app.state.container.close()
                app.state.container = None
            logger.info("app_stopped")

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    register_routes(app, settings.api.services, metrics=settings.observability.metrics.enabled)

    logger.info(
        "app_created",
        debug=settings.debug,
        services=settings.api.services,
    )
    return app


def main() -> None:
    """Serve the configured services with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api.host, port=settings.api.port)
