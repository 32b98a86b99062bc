"""Application lifespan management."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from weather_dashboard import __version__
from weather_dashboard.config import Settings
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.middleware.logging_middleware import redact_sensitive_data
from weather_dashboard.state_managers import PreferencesManager

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log upstream requests with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log upstream responses with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Create the shared HTTP client used for every upstream call.

    Timeouts and connection limits live here, at the application edge; the
    weather client itself has no timeout policy of its own.
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,
            read=10.0,
            write=5.0,
            pool=5.0,
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions raised after yield are logged and re-raised so cleanup still runs.
    """
    settings: Settings = app.state.settings

    log_with_context(
        logger,
        "info",
        "Starting Weather Dashboard application",
        version=__version__,
        event_type="app_startup",
    )

    client = create_http_client()
    app.state.http_client = client
    log_with_context(logger, "info", "HTTP client initialized successfully", event_type="http_client_ready")

    app.state.preferences_manager = PreferencesManager(settings.preferences_path)
    await app.state.preferences_manager.initialize()

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(logger, "info", "Shutting down Weather Dashboard application", event_type="app_shutdown")

        await app.state.preferences_manager.cleanup()
        await client.aclose()
        log_with_context(logger, "info", "HTTP client closed", event_type="http_client_cleanup")
