"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Depends, Request

from weather_lookup.config import Settings
from weather_lookup.services.lookup_service import WeatherLookup


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. Is the application lifespan running?")

    return client


async def get_app_settings(request: Request) -> Settings:
    """
    Get the Settings instance the application was created with.

    Raises:
        RuntimeError: If settings were not attached by the app factory.
    """
    settings: Settings | None = getattr(request.app.state, "settings", None)

    if settings is None:
        raise RuntimeError("Settings not initialized.")

    return settings


async def get_weather_lookup(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> WeatherLookup:
    """Build a fresh, single-use WeatherLookup for the current request."""
    return WeatherLookup(client, settings)
