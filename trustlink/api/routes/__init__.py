"""API route registration."""

from collections.abc import Iterable

from fastapi import APIRouter, FastAPI

from trustlink.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router(services: Iterable[str]) -> APIRouter:
    """Create the v1 router with the routers for `services`.

    Args:
        services: Service names to mount (profile, feed, connections)

    Returns:
        APIRouter with the selected routes registered
    """
    from trustlink.api.routes.connections import router as connections_router
    from trustlink.api.routes.feed import router as feed_router
    from trustlink.api.routes.profile import router as profile_router

    available = {
        "profile": (profile_router, "Profile"),
        "feed": (feed_router, "Feed"),
        "connections": (connections_router, "Connections"),
    }

    router = APIRouter(prefix="/v1")
    mounted = []
    for name in services:
        sub_router, tag = available[name]
        router.include_router(sub_router, tags=[tag])
        mounted.append(name)

    logger.debug("v1_router_created", routes=mounted)
    return router


def register_routes(app: FastAPI, services: Iterable[str], metrics: bool = True) -> None:
    """Register the selected v1 routes plus health (and metrics) at root level."""
    app.include_router(create_v1_router(services))

    from trustlink.api.routes.health import metrics_router
    from trustlink.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered")
