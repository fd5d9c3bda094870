"""Middleware configuration."""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from weather_lookup.config import Settings
from weather_lookup.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    origins = settings.cors_origin_list
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        event_type="security_config",
        origins=origins,
    )
    # The front-end form only ever posts JSON
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every inbound request with its status and duration."""
        started = time.perf_counter()
        # Unhandled exceptions surface as 500 from ServerErrorMiddleware
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log_with_context(
                logger,
                "info",
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                event_type="http_inbound",
            )
