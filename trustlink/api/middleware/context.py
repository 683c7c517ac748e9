"""Request context middleware for observability."""

import uuid
from collections.abc import Callable
from contextvars import ContextVar

import structlog
from fastapi import Request, Response
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

from trustlink.api.models.context import RequestContext
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_request_context() -> RequestContext | None:
    """Get the current request context, or None outside a request."""
    return _request_context.get()


def set_request_context(context: RequestContext) -> None:
    _request_context.set(context)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id (forwarded or generated) to logs and the response."""

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        span_context = trace.get_current_span().get_span_context()
        trace_id = format(span_context.trace_id, "032x") if span_context.is_valid else ""

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        context = RequestContext(request_id=request_id, trace_id=trace_id)
        set_request_context(context)
        request.state.context = context

        structlog.contextvars.bind_contextvars(request_id=request_id)
        if trace_id:
            structlog.contextvars.bind_contextvars(trace_id=trace_id)

        logger.debug("request_started", method=request.method, path=request.url.path)
        try:
            response = await call_next(request)  # type: ignore[misc]
        finally:
            structlog.contextvars.clear_contextvars()

        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response  # type: ignore[no-any-return]


def update_request_context(*, uid: str | None = None) -> None:
    """Add the authenticated uid to the current context and log binding."""
    current = get_request_context()
    if not current:
        return
    set_request_context(current.model_copy(update={"uid": uid}))
    structlog.contextvars.bind_contextvars(uid=uid)
