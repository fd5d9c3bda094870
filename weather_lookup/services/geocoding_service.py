"""Geocoding client for the OpenWeatherMap Geocoding API."""

import httpx
from pydantic import TypeAdapter, ValidationError

from weather_lookup.config import Settings
from weather_lookup.exceptions import (
    InvalidPlaceQueryException,
    LocationNotFoundException,
    MalformedPayloadException,
)
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.models.weather import Coordinates, GeocodingMatch
from weather_lookup.services.upstream import get_json

# Only the best match is ever used
RESULT_LIMIT = 1

_matches_adapter = TypeAdapter(list[GeocodingMatch])

logger = get_logger(__name__)


def validate_place_name(place_name: str, settings: Settings) -> str:
    """Return the trimmed place name or raise InvalidPlaceQueryException."""
    if not isinstance(place_name, str):
        raise InvalidPlaceQueryException(details={"reason": "not_a_string"})

    cleaned = place_name.strip()
    if not cleaned:
        raise InvalidPlaceQueryException(details={"reason": "empty"})
    if len(cleaned) > settings.max_place_name_length:
        raise InvalidPlaceQueryException(
            details={"reason": "too_long", "length": len(cleaned), "max_length": settings.max_place_name_length},
        )
    return cleaned


async def geocode(client: httpx.AsyncClient, place_name: str, settings: Settings) -> Coordinates:
    """Resolve a free-text place name to coordinates.

    Args:
        client: Shared HTTP client for making requests
        place_name: Place name entered by the user
        settings: Settings instance carrying the API credential

    Returns:
        Coordinates of the first (best) match

    Raises:
        InvalidPlaceQueryException: Place name is empty or too long
        LocationNotFoundException: Provider returned zero matches
        UpstreamUnavailableException: Provider could not be reached
        UpstreamErrorException: Provider failed or returned a malformed body
        RequestSetupException: Request could not be constructed
    """
    query = validate_place_name(place_name, settings)
    params: dict[str, str | int | float] = {
        "q": query,
        "limit": RESULT_LIMIT,
        "appid": settings.weather_api_key,
    }

    data = await get_json(client, settings.geocoding_url, params, upstream="geocoding")

    try:
        matches = _matches_adapter.validate_python(data)
    except ValidationError as e:
        log_with_context(
            logger,
            "warning",
            "Geocoding response failed validation",
            place_name=query,
            error_count=e.error_count(),
            event_type="geocoding_malformed",
        )
        raise MalformedPayloadException(details={"upstream": "geocoding", "error_type": "validation"}) from e

    if not matches:
        log_with_context(
            logger,
            "info",
            "No geocoding match",
            place_name=query,
            event_type="geocoding_not_found",
        )
        raise LocationNotFoundException(details={"place_name": query})

    best = matches[0]
    try:
        coordinates = best.to_coordinates()
    except ValidationError as e:
        raise MalformedPayloadException(
            details={"upstream": "geocoding", "error_type": "coordinates_out_of_range"},
        ) from e

    log_with_context(
        logger,
        "debug",
        "Place resolved",
        place_name=query,
        match_name=best.name,
        country=best.country,
        latitude=coordinates.latitude,
        longitude=coordinates.longitude,
        event_type="geocoding_resolved",
    )
    return coordinates
