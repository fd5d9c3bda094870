"""Weather Lookup models"""

from weather_lookup.models.base_models import DetailedHealthResponse, ErrorResponse, HealthResponse
from weather_lookup.models.weather import (
    Coordinates,
    GeocodingMatch,
    PlaceQuery,
    RawWeatherPayload,
    WeatherSnapshot,
)

__all__ = [
    "DetailedHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "Coordinates",
    "GeocodingMatch",
    "PlaceQuery",
    "RawWeatherPayload",
    "WeatherSnapshot",
]
