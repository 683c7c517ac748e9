"""API request/response models."""

from trustlink.api.models.context import RequestContext
from trustlink.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from trustlink.api.models.health import HealthResponse

__all__ = [
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "RequestContext",
]
