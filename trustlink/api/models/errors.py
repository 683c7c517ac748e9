"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes shared by every service."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Malformed body, missing field or self-referential request."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    """Missing, malformed or rejected bearer credential."""

    FORBIDDEN = "FORBIDDEN"
    """The caller may not act on this resource."""

    NOT_FOUND = "NOT_FOUND"
    """The addressed resource does not exist."""

    CONFLICT = "CONFLICT"
    """The resource's current state blocks the request."""

    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    """A backing store could not be reached."""

    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    """The gateway could not reach the owning service."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "NOT_FOUND",
                "message": "No connection request from alice"
            }
        }
    """

    error: ErrorBody
