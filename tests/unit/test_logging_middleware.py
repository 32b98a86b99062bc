"""Tests for sensitive data redaction."""

import pytest

from weather_dashboard.middleware.logging_middleware import redact_sensitive_data


def test_redacts_appid():
    """Test the OpenWeatherMap credential is hidden."""
    url = "https://api.openweathermap.org/data/2.5/weather?q=London&units=metric&appid=abc123"

    redacted = redact_sensitive_data(url)

    assert "abc123" not in redacted
    assert redacted == "https://api.openweathermap.org/data/2.5/weather?q=London&units=metric&appid=***REDACTED***"


def test_redacts_first_parameter():
    """Test a credential in the first query position is hidden."""
    assert redact_sensitive_data("https://x.test/?appid=abc&q=Paris") == "https://x.test/?appid=***REDACTED***&q=Paris"


@pytest.mark.parametrize("param", ["api_key", "token", "password", "secret", "key"])
def test_redacts_other_sensitive_params(param):
    """Test every sensitive parameter name is hidden."""
    redacted = redact_sensitive_data(f"https://x.test/path?{param}=s3cr3t&lat=1")

    assert "s3cr3t" not in redacted
    assert "lat=1" in redacted


def test_leaves_other_urls_alone():
    """Test URLs without credentials pass through."""
    url = "https://api.openweathermap.org/geo/1.0/direct?q=London&limit=1"

    assert redact_sensitive_data(url) == url
