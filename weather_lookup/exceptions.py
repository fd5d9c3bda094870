"""Custom exceptions for Weather Lookup with proper HTTP status codes."""

from enum import Enum
from typing import Any

LOCATION_NOT_FOUND_MESSAGE = "Location not found"
UPSTREAM_UNAVAILABLE_MESSAGE = "Unable to connect to the weather service"
UPSTREAM_ERROR_MESSAGE = "Error fetching weather data from the server"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
INVALID_PLACE_NAME_MESSAGE = "Please enter a valid place name"


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    WEATHER_LOOKUP_ERROR = "WEATHER_LOOKUP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Inbound request errors
    INVALID_PLACE_NAME = "INVALID_PLACE_NAME"

    # Lookup pipeline errors
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    REQUEST_SETUP_ERROR = "REQUEST_SETUP_ERROR"


class WeatherLookupException(Exception):
    """Base exception for lookup errors with HTTP status code support.

    ``message`` is the stable, user-facing text returned to the caller.
    ``details`` carries internal context for logs only and is never
    rendered into a response.
    """

    def __init__(
        self,
        message: str = UNEXPECTED_ERROR_MESSAGE,
        code: ErrorCode = ErrorCode.WEATHER_LOOKUP_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize lookup exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidPlaceQueryException(WeatherLookupException):
    """Place name is empty, whitespace-only or too long."""

    def __init__(self, message: str = INVALID_PLACE_NAME_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.INVALID_PLACE_NAME,
            status_code=422,
            details=details,
        )


class LocationNotFoundException(WeatherLookupException):
    """Geocoder returned zero matches for the place name."""

    def __init__(self, message: str = LOCATION_NOT_FOUND_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.LOCATION_NOT_FOUND,
            status_code=404,
            details=details,
        )


class UpstreamUnavailableException(WeatherLookupException):
    """No response was received from a provider (connection failure or timeout)."""

    def __init__(self, message: str = UPSTREAM_UNAVAILABLE_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
            status_code=500,
            details=details,
        )


class UpstreamErrorException(WeatherLookupException):
    """Provider responded, but with a failure status."""

    def __init__(
        self,
        message: str = UPSTREAM_ERROR_MESSAGE,
        code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=code,
            status_code=500,
            details=details,
        )


class MalformedPayloadException(UpstreamErrorException):
    """Provider responded successfully but the body broke its contract."""

    def __init__(self, message: str = UPSTREAM_ERROR_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.MALFORMED_PAYLOAD,
            details=details,
        )


class RequestSetupException(WeatherLookupException):
    """The outbound request could not be built or sent."""

    def __init__(self, message: str = UNEXPECTED_ERROR_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.REQUEST_SETUP_ERROR,
            status_code=500,
            details=details,
        )
