"""Exception handlers for the application.

Every error path renders ``{"error": <message>, "code": <code>}``. Messages
are stable per error kind; provider text and internal details only go to
the logs.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_lookup.exceptions import (
    INVALID_PLACE_NAME_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ErrorCode,
    WeatherLookupException,
)
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.models.base_models import ErrorResponse

logger = get_logger(__name__)


def error_response(status_code: int, message: str, code: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, code=code).model_dump(),
        headers=headers,
    )


async def lookup_exception_handler(request: Request, exc: WeatherLookupException) -> JSONResponse:
    """Handle lookup exceptions with their HTTP status codes."""
    log_with_context(
        logger,
        "warning",
        "Lookup error",
        error_code=exc.code.value,
        error_message=exc.message,
        error_details=exc.details,
        status_code=exc.status_code,
        method=request.method,
        path=request.url.path,
        event_type="lookup_error",
    )
    return error_response(exc.status_code, exc.message, exc.code.value)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject request bodies that are not ``{"placeName": <non-empty string>}``."""
    log_with_context(
        logger,
        "info",
        "Invalid request body",
        errors=[".".join(str(part) for part in err["loc"]) for err in exc.errors()],
        method=request.method,
        path=request.url.path,
        event_type="validation_error",
    )
    return error_response(422, INVALID_PLACE_NAME_MESSAGE, ErrorCode.INVALID_PLACE_NAME.value)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the error shape."""
    if exc.status_code == 404:
        code = ErrorCode.NOT_FOUND
    elif exc.status_code == 405:
        code = ErrorCode.METHOD_NOT_ALLOWED
    elif exc.status_code < 500:
        code = ErrorCode.VALIDATION_ERROR
    else:
        code = ErrorCode.INTERNAL_ERROR
    return error_response(exc.status_code, str(exc.detail), code.value, headers=getattr(exc, "headers", None))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    # Don't expose internal error details to clients
    return error_response(500, UNEXPECTED_ERROR_MESSAGE, ErrorCode.INTERNAL_ERROR.value)


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application."""
    app.add_exception_handler(WeatherLookupException, lookup_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
