"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from weather_lookup import __version__
from weather_lookup.config import Settings, get_settings
from weather_lookup.core.lifespan import lifespan
from weather_lookup.core.middleware import setup_middleware
from weather_lookup.middleware.error_handlers import register_error_handlers
from weather_lookup.routers import health_router, weather_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with (defaults to the environment-loaded singleton)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Weather Lookup API",
        description="""
        Resolve a place name to current weather conditions.

        ## Endpoints
        - `POST /weather` - standalone server path
        - `POST /api/weather` - serverless function path (same behaviour)

        Both accept `{"placeName": "London"}` and return description, icon,
        temperature (°C), humidity (%) and wind speed (m/s).

        ## Health
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    # Built once here and injected from app.state
    app.state.settings = settings

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(weather_router.router, tags=["weather"])
    app.include_router(weather_router.router, prefix="/api", tags=["weather"])

    return app
