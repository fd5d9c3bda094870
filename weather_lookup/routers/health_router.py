"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from weather_lookup import __version__
from weather_lookup.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for container healthchecks and basic monitoring.
    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request):
    """Readiness probe - can the application serve traffic?

    Does not call the weather providers; each call counts against the API quota.

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: Application is not ready
    """
    checks = {}

    client = getattr(request.app.state, "http_client", None)
    checks["http_client"] = "ok" if client is not None and not client.is_closed else "not_initialized"

    settings = getattr(request.app.state, "settings", None)
    checks["weather_api_key"] = "ok" if settings is not None and settings.weather_api_key else "missing"

    all_healthy = all(result == "ok" for result in checks.values())

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
