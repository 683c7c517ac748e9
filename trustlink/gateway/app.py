"""Gateway application: health plus the forwarding table under /v1."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response

from trustlink import __version__
from trustlink.api.exceptions import ResourceNotFoundError
from trustlink.api.handlers import register_exception_handlers
from trustlink.api.middleware.context import RequestContextMiddleware
from trustlink.config import get_settings
from trustlink.config.settings import Settings
from trustlink.gateway.proxy import ReverseProxy, build_routes
from trustlink.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_gateway_app(
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create the gateway application.

    Args:
        settings: Settings to use; loaded from config files when omitted
        client: HTTP client for upstream calls; created in the lifespan
            when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(log_config.level, log_config.format, log_config.redact_pii)
    routes = build_routes(settings.gateway)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "proxy", None) is None
        http_client = None
        if owned:
            http_client = httpx.AsyncClient(timeout=settings.gateway.timeout_seconds)
            app.state.proxy = ReverseProxy(routes, http_client)
        logger.info("gateway_started", routes=[route.prefix for route in routes])
        try:
            yield
        finally:
            if http_client is not None:
                await http_client.aclose()
                app.state.proxy = None
            logger.info("gateway_stopped")

    app = FastAPI(title=f"{settings.app_name}-gateway", version=__version__, lifespan=lifespan)
    if client is not None:
        app.state.proxy = ReverseProxy(routes, client)

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "service": "gateway"}

    @app.api_route("/v1/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request, path: str) -> Response:
        reverse_proxy: ReverseProxy = request.app.state.proxy
        route = reverse_proxy.match(request.url.path)
        if route is None:
            raise ResourceNotFoundError(f"No service handles {request.url.path}")
        return await reverse_proxy.forward(route, request)

    return app


def main() -> None:
    """Serve the gateway with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_gateway_app(settings), host=settings.api.host, port=settings.api.port)
