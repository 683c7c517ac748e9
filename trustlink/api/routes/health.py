"""Health check and metrics endpoints."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from trustlink.api.dependencies import ContainerDep
from trustlink.api.models.health import HealthResponse
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def health_check(container: ContainerDep) -> HealthResponse:
    """Report liveness and whether the document store answers.

    An unreachable store yields `degraded` with a 200 so that the process
    is not restarted for an outage it cannot fix.
    """
    documents_ok = await container.documents.ping()
    status = "ok" if documents_ok else "degraded"
    logger.debug("health_check_completed", status=status)
    return HealthResponse(
        status=status,
        service=",".join(container.settings.api.services),
        documents=documents_ok,
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
