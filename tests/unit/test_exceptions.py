"""Tests for custom exception classes."""

from weather_dashboard.exceptions import (
    ErrorCode,
    MalformedResponseException,
    PlaceNotFoundException,
    StorageException,
    UpstreamAPIException,
    UpstreamAuthException,
    UpstreamException,
    UpstreamTransportException,
    WeatherDashboardException,
)


class TestErrorCodes:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.PLACE_NOT_FOUND == "PLACE_NOT_FOUND"
        assert ErrorCode.UPSTREAM_AUTH_FAILED == "UPSTREAM_AUTH_FAILED"
        assert ErrorCode.UPSTREAM_ERROR == "UPSTREAM_ERROR"
        assert ErrorCode.UPSTREAM_UNREACHABLE == "UPSTREAM_UNREACHABLE"
        assert ErrorCode.MALFORMED_RESPONSE == "MALFORMED_RESPONSE"
        assert ErrorCode.STORAGE_ERROR == "STORAGE_ERROR"


class TestWeatherDashboardException:
    """Tests for WeatherDashboardException."""

    def test_basic(self):
        """Test creating basic dashboard exception."""
        exc = WeatherDashboardException(message="Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.DASHBOARD_ERROR
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_with_details(self):
        """Test dashboard exception with details."""
        exc = WeatherDashboardException(
            message="Test error", code=ErrorCode.INTERNAL_ERROR, status_code=503, details={"key": "value"}
        )

        assert exc.code == ErrorCode.INTERNAL_ERROR
        assert exc.status_code == 503
        assert exc.details == {"key": "value"}


class TestUpstreamExceptions:
    """Tests for the upstream failure kinds."""

    def test_place_not_found_defaults(self):
        """Test the default message is user-facing."""
        exc = PlaceNotFoundException(upstream_status=404)

        assert isinstance(exc, UpstreamException)
        assert exc.message == "City not found. Please check the spelling and try again."
        assert exc.code == ErrorCode.PLACE_NOT_FOUND
        assert exc.status_code == 404
        assert exc.upstream_status == 404

    def test_auth_failure(self):
        """Test auth failures are served as bad gateway."""
        exc = UpstreamAuthException()

        assert exc.code == ErrorCode.UPSTREAM_AUTH_FAILED
        assert exc.status_code == 502
        assert exc.upstream_status == 401
        assert "API key" in exc.message

    def test_upstream_api_error_keeps_status(self):
        """Test the upstream status is carried."""
        exc = UpstreamAPIException("Weather API request failed (HTTP 503)", upstream_status=503, details={"a": 1})

        assert exc.code == ErrorCode.UPSTREAM_ERROR
        assert exc.status_code == 502
        assert exc.upstream_status == 503
        assert exc.details == {"a": 1}

    def test_transport_failure(self):
        """Test transport failures have no upstream status."""
        exc = UpstreamTransportException()

        assert exc.code == ErrorCode.UPSTREAM_UNREACHABLE
        assert exc.status_code == 503
        assert exc.upstream_status is None

    def test_malformed_response(self):
        """Test malformed responses are served as bad gateway."""
        exc = MalformedResponseException(details={"payload": "forecast"})

        assert exc.code == ErrorCode.MALFORMED_RESPONSE
        assert exc.status_code == 502
        assert exc.details == {"payload": "forecast"}


class TestStorageException:
    """Tests for StorageException."""

    def test_storage_exception(self):
        """Test storage failures are internal errors."""
        exc = StorageException("Failed to save preferences", details={"path": "/tmp/x"})

        assert not isinstance(exc, UpstreamException)
        assert exc.code == ErrorCode.STORAGE_ERROR
        assert exc.status_code == 500
        assert exc.details["path"] == "/tmp/x"
