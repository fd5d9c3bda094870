"""Weather service for the OpenWeatherMap Current Weather API."""

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from weather_lookup.config import Settings
from weather_lookup.exceptions import MalformedPayloadException
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.models.weather import Coordinates, RawWeatherPayload, WeatherSnapshot
from weather_lookup.services.upstream import get_json

logger = get_logger(__name__)


def parse_payload(data: Any) -> RawWeatherPayload:
    """Validate a decoded provider body into RawWeatherPayload.

    Raises:
        MalformedPayloadException: Required fields are missing or of the wrong type
    """
    try:
        return RawWeatherPayload.model_validate(data)
    except ValidationError as e:
        missing = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        log_with_context(
            logger,
            "warning",
            "Weather response failed validation",
            invalid_fields=missing,
            event_type="weather_malformed",
        )
        raise MalformedPayloadException(
            details={"upstream": "weather", "error_type": "validation", "fields": missing},
        ) from e


async def fetch_weather(client: httpx.AsyncClient, coordinates: Coordinates, settings: Settings) -> RawWeatherPayload:
    """Get current weather for coordinates from OpenWeatherMap.

    Args:
        client: Shared HTTP client for making requests
        coordinates: Output of the geocoding stage for the same request
        settings: Settings instance carrying the API credential

    Returns:
        Validated RawWeatherPayload

    Raises:
        UpstreamUnavailableException: Provider could not be reached
        UpstreamErrorException: Provider failed or returned a malformed body
        RequestSetupException: Request could not be constructed
    """
    params: dict[str, str | int | float] = {
        "lat": coordinates.latitude,
        "lon": coordinates.longitude,
        "appid": settings.weather_api_key,
        "units": settings.weather_units,
        "lang": settings.weather_lang,
    }

    data = await get_json(client, settings.weather_url, params, upstream="weather")
    return parse_payload(data)


def normalize(payload: RawWeatherPayload | Mapping[str, Any]) -> WeatherSnapshot:
    """Map a provider payload onto the stable WeatherSnapshot shape.

    Pure function. Unvalidated mappings are validated first, so a payload
    without a weather-conditions entry raises instead of producing a
    partial snapshot.

    Raises:
        MalformedPayloadException: Expected fields are absent
    """
    if not isinstance(payload, RawWeatherPayload):
        payload = parse_payload(payload)
    if not payload.weather:
        raise MalformedPayloadException(details={"upstream": "weather", "error_type": "no_conditions"})
    return WeatherSnapshot.from_openweather(payload)
