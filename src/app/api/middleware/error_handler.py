"""Global error handling.

Every error leaving the API has the same JSON shape:
``{error_code, message, user_message, suggestion, retry_allowed}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.core.errors import error_payload
from app.core.exceptions import CategorizationError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error_code: str, message: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(error_code, message))


async def handle_categorization_error(
    request: Request, exc: CategorizationError
) -> JSONResponse:
    """Handle custom categorization exceptions.

    Args:
        request: The incoming request
        exc: The categorization exception

    Returns:
        JSONResponse with error details from catalog
    """
    # Details can include descriptions; only log them in debug.
    extra = {"error_code": exc.error_code, "path": request.url.path, "http_method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    logger.error(f"Categorization error: {exc.error_code}", extra=extra)

    return _error_response(exc.http_status, exc.error_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse listing the invalid fields
    """
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "http_method": request.method},
    )

    return _error_response(status.HTTP_400_BAD_REQUEST, "VAL_001", " | ".join(error_messages))


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors that escaped the service layer."""
    # Do not log str(exc): it can include SQL + bound parameters.
    logger.error(
        f"Database error on {request.url.path}",
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "http_method": request.method,
        },
        exc_info=settings.debug,
    )

    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001")


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    logger.error(
        f"Unexpected error on {request.url.path}",
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "http_method": request.method,
        },
        exc_info=settings.debug,
    )

    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001")
