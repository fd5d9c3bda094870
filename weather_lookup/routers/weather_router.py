"""Weather lookup route.

The same router is mounted at ``/weather`` (standalone server) and
``/api/weather`` (serverless function path) by the app factory.
"""

from fastapi import APIRouter, Depends

from weather_lookup.dependencies import get_weather_lookup
from weather_lookup.models.base_models import ErrorResponse
from weather_lookup.models.weather import PlaceQuery, WeatherSnapshot
from weather_lookup.services.lookup_service import WeatherLookup

router = APIRouter()


@router.post(
    "/weather",
    response_model=WeatherSnapshot,
    response_model_exclude_none=True,
    summary="Get current weather for a place",
    description="""
    Resolves a place name to coordinates with the OpenWeatherMap geocoding API,
    then fetches current conditions for those coordinates in metric units.

    Only the best geocoding match is used.
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "description": "clear sky",
                        "icon": "01d",
                        "temperature": 15.2,
                        "humidity": 60,
                        "wind_speed": 3.1,
                    }
                }
            },
        },
        404: {"model": ErrorResponse, "description": "Location not found"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        422: {"model": ErrorResponse, "description": "Invalid place name"},
        500: {"model": ErrorResponse, "description": "Weather provider unreachable or failed"},
    },
)
async def lookup_weather(
    query: PlaceQuery,
    lookup: WeatherLookup = Depends(get_weather_lookup),
) -> WeatherSnapshot:
    """Look up current weather for the submitted place name.

    Args:
        query: Request body with ``placeName``
        lookup: Fresh WeatherLookup from dependency injection

    Returns:
        WeatherSnapshot with description, icon, temperature, humidity and wind_speed
    """
    return await lookup.resolve(query.place_name)
