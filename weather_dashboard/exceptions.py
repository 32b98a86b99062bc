"""Custom exceptions for Weather Dashboard with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    DASHBOARD_ERROR = "DASHBOARD_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Upstream weather provider errors
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"
    UPSTREAM_AUTH_FAILED = "UPSTREAM_AUTH_FAILED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_UNREACHABLE = "UPSTREAM_UNREACHABLE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

    # Preferences storage errors
    STORAGE_ERROR = "STORAGE_ERROR"


class WeatherDashboardException(Exception):
    """Base exception for dashboard errors with HTTP status code support.

    All custom exceptions inherit from this class so the API layer can
    render them consistently.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DASHBOARD_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize dashboard exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code served to our own clients (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class UpstreamException(WeatherDashboardException):
    """Errors talking to the upstream weather provider."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        status_code: int = 502,
        upstream_status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.upstream_status = upstream_status
        super().__init__(message, code, status_code, details)


class PlaceNotFoundException(UpstreamException):
    """No place matches the requested name."""

    def __init__(
        self,
        message: str = "City not found. Please check the spelling and try again.",
        upstream_status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.PLACE_NOT_FOUND,
            status_code=404,
            upstream_status=upstream_status,
            details=details,
        )


class UpstreamAuthException(UpstreamException):
    """The upstream provider rejected the API credential."""

    def __init__(
        self,
        message: str = "API key invalid. Please check your configuration.",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.UPSTREAM_AUTH_FAILED,
            status_code=502,
            upstream_status=401,
            details=details,
        )


class UpstreamAPIException(UpstreamException):
    """Upstream answered with a non-success status that has no dedicated kind."""

    def __init__(self, message: str, upstream_status: int, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.UPSTREAM_ERROR,
            status_code=502,
            upstream_status=upstream_status,
            details=details,
        )


class UpstreamTransportException(UpstreamException):
    """Network or connection failure before any response arrived."""

    def __init__(
        self,
        message: str = "Failed to reach the weather service",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.UPSTREAM_UNREACHABLE,
            status_code=503,
            details=details,
        )


class MalformedResponseException(UpstreamException):
    """Upstream body is not JSON or lacks a required field."""

    def __init__(
        self,
        message: str = "Weather service returned an unexpected response",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.MALFORMED_RESPONSE,
            status_code=502,
            details=details,
        )


class StorageException(WeatherDashboardException):
    """Preferences could not be written."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.STORAGE_ERROR,
            status_code=500,
            details=details,
        )
