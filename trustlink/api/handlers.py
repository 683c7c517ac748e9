"""Global exception handlers shared by the service and gateway apps."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from trustlink.api.exceptions import TrustLinkAPIError
from trustlink.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from trustlink.documents.errors import StoreConnectionError
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)


def error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the standard error envelope."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def _details(errors: list) -> list[ErrorDetail]:
    return [
        ErrorDetail(field=".".join(str(loc) for loc in error["loc"]), message=error["msg"])
        for error in errors
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(TrustLinkAPIError)
    async def trustlink_api_error_handler(
        request: Request, exc: TrustLinkAPIError
    ) -> JSONResponse:
        """Handle TrustLinkAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.error_code, exc.message, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)
        return error_response(
            400, ErrorCode.INVALID_REQUEST, "Request validation failed", _details(exc.errors())
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        logger.warning("pydantic_validation_error", errors=exc.errors(), path=request.url.path)
        return error_response(
            400, ErrorCode.INVALID_REQUEST, "Data validation failed", _details(exc.errors())
        )

    @app.exception_handler(StoreConnectionError)
    async def store_unavailable_handler(
        request: Request, exc: StoreConnectionError
    ) -> JSONResponse:
        logger.error("store_unavailable", error=str(exc), path=request.url.path)
        return error_response(
            500, ErrorCode.SERVICE_UNAVAILABLE, "Storage is temporarily unavailable"
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return error_response(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred")

    logger.debug("exception_handlers_registered")
