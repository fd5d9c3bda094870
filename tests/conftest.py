"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

# Settings() requires the credential; set it before the app module is imported
os.environ.setdefault("WEATHER_API_KEY", "test-weather-key")

from weather_lookup.config import OPENWEATHER_GEOCODING_URL, OPENWEATHER_WEATHER_URL, Settings  # noqa: E402


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        weather_api_key="test-weather-key",
        request_timeout=5.0,
        connect_timeout=2.0,
    )


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build real httpx.Response objects bound to a request."""

    def _make(
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        url: str = OPENWEATHER_WEATHER_URL,
    ) -> httpx.Response:
        request = httpx.Request("GET", url)
        if text is not None:
            return httpx.Response(status_code, text=text, request=request)
        return httpx.Response(status_code, json=json, request=request)

    return _make


@pytest.fixture
def mock_geocoding_response():
    """Mock OpenWeatherMap geocoding response for London."""
    return [
        {
            "name": "London",
            "local_names": {"en": "London"},
            "lat": 51.5,
            "lon": -0.12,
            "country": "GB",
            "state": "England",
        }
    ]


@pytest.fixture
def mock_weather_response():
    """Mock OpenWeatherMap current weather response."""
    return {
        "coord": {"lon": -0.12, "lat": 51.5},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": 15.2,
            "feels_like": 14.6,
            "temp_min": 13.9,
            "temp_max": 16.4,
            "pressure": 1018,
            "humidity": 60,
        },
        "visibility": 10000,
        "wind": {"speed": 3.1, "deg": 240},
        "clouds": {"all": 0},
        "dt": 1760000000,
        "sys": {"country": "GB", "sunrise": 1759990000, "sunset": 1760030000},
        "timezone": 3600,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def geocoding_url():
    return OPENWEATHER_GEOCODING_URL
