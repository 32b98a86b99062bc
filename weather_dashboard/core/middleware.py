"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weather_dashboard.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# The browser dashboard is served from the same machine during development
LOCAL_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
    """
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware with regex pattern",
        pattern=LOCAL_ORIGIN_REGEX,
        event_type="security_config",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=LOCAL_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
