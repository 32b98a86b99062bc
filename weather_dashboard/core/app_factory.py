"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from weather_dashboard import __version__
from weather_dashboard.config import Settings, get_settings
from weather_dashboard.core.lifespan import lifespan
from weather_dashboard.core.middleware import setup_middleware
from weather_dashboard.middleware.error_handlers import register_error_handlers
from weather_dashboard.routers import favorites_router, health_router, preferences_router, weather_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings instance (defaults to singleton)

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Weather Dashboard API",
        description="""
        🌦️ **Weather Dashboard** - current conditions, 5-day forecast and favorite cities

        Data comes from OpenWeatherMap. Every weather endpoint accepts either
        `city` or `lat` + `lon`, and an optional `units` (`metric` or
        `imperial`). Without `units` the saved unit preference applies.

        Errors are returned as `{"error": {"code", "message", "details"}}`.
        """,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_middleware(app)
    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])
    app.include_router(favorites_router.router, prefix="/api/favorites", tags=["favorites"])
    app.include_router(preferences_router.router, prefix="/api/preferences", tags=["preferences"])

    return app
