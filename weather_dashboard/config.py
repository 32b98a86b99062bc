from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-dashboard/


class Settings(BaseSettings):
    """Application settings with validation.

    The OpenWeatherMap credential is required and must be provided via
    environment variables or the .env file. Everything else has a default.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    log_level: str = Field(default="INFO", description="Root log level")

    # Upstream weather provider - required
    openweather_api_key: str = Field(min_length=1, description="OpenWeatherMap API key")
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        pattern=r"^https?://",
        description="Base URL for current conditions and forecast endpoints",
    )
    openweather_geo_url: str = Field(
        default="https://api.openweathermap.org/geo/1.0",
        pattern=r"^https?://",
        description="Base URL for the geocoding endpoint",
    )

    # Preferences
    preferences_path: Path = Field(
        default=BASE_DIR / "data" / "preferences.json",
        description="JSON file holding favorites, last search and unit preference",
    )
    favorites_refresh_concurrency: int = Field(
        default=4, ge=1, le=32, description="Max concurrent upstream calls when refreshing favorites"
    )

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("openweather_api_key", "api_host", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("openweather_base_url", "openweather_geo_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended with a leading slash."""
        return v.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Avoids re-reading the .env file on every request. Use this with
    FastAPI's Depends().

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
