"""API exception hierarchy for consistent error handling.

All API exceptions inherit from TrustLinkAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from trustlink.api.models.errors import ErrorCode


class TrustLinkAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(TrustLinkAPIError):
    """Raised when request validation fails."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class UnauthenticatedError(TrustLinkAPIError):
    """Raised when no valid bearer credential accompanies the request."""

    status_code = 401
    error_code = ErrorCode.UNAUTHENTICATED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(TrustLinkAPIError):
    """Raised when the caller is authenticated but not allowed."""

    status_code = 403
    error_code = ErrorCode.FORBIDDEN


class ResourceNotFoundError(TrustLinkAPIError):
    """Raised when the addressed resource doesn't exist."""

    status_code = 404
    error_code = ErrorCode.NOT_FOUND


class ResourceConflictError(TrustLinkAPIError):
    """Raised when current state blocks the operation."""

    status_code = 409
    error_code = ErrorCode.CONFLICT


class UpstreamError(TrustLinkAPIError):
    """Raised by the gateway when the owning service fails."""

    status_code = 502
    error_code = ErrorCode.UPSTREAM_ERROR
