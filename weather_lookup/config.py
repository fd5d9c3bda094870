"""Application configuration loaded from environment variables and .env."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-lookup/

OPENWEATHER_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"
OPENWEATHER_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class Settings(BaseSettings):
    """Application settings with validation.

    The API credential is required and will raise a validation error if missing.
    All secrets must be provided via environment variables or .env file.

    A Settings instance is built once at startup and handed to the clients
    explicitly; request handling never reads the environment.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=5000, description="API server port")
    log_level: str = Field(default="INFO", description="Root log level")

    # OpenWeatherMap - required
    weather_api_key: str = Field(min_length=1, description="OpenWeatherMap API key")
    geocoding_url: str = Field(default=OPENWEATHER_GEOCODING_URL, description="Geocoding endpoint")
    weather_url: str = Field(default=OPENWEATHER_WEATHER_URL, description="Current weather endpoint")
    weather_units: str = Field(default="metric", description="Unit system requested from the weather provider")
    weather_lang: str = Field(default="en", min_length=2, description="Language of condition descriptions")

    # Outbound HTTP
    request_timeout: float = Field(default=10.0, gt=0, le=60, description="Read timeout in seconds")
    connect_timeout: float = Field(default=5.0, gt=0, le=60, description="Connect timeout in seconds")
    http_proxy: str | None = Field(default=None, description="Optional proxy for outbound requests")

    # Inbound requests
    max_place_name_length: int = Field(default=100, ge=1, le=500, description="Maximum accepted place name")
    cors_origins: str = Field(default="*", description="Comma-separated list of allowed CORS origins")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", "weather_api_key", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure required strings are not whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("geocoding_url", "weather_url", mode="after")
    @classmethod
    def validate_upstream_url(cls, v: str) -> str:
        """Ensure upstream URLs use http:// or https://."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("upstream URLs must start with http:// or https://")
        return v

    @field_validator("weather_units", mode="after")
    @classmethod
    def validate_weather_units(cls, v: str) -> str:
        """Only the metric unit system matches the snapshot contract (°C, m/s)."""
        v = v.strip().lower()
        if v != "metric":
            raise ValueError("weather_units must be 'metric'")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Called once by the application factory at startup. The resulting
    instance is stored on ``app.state`` and injected from there.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
