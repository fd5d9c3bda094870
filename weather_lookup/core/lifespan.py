"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from weather_lookup import __version__
from weather_lookup.config import Settings
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log outbound requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log provider responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared outbound HTTP client.

    Args:
        settings: Application settings (timeouts, optional proxy)

    Returns:
        AsyncClient with bounded timeouts and connection pooling
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }

    if settings.http_proxy:
        log_with_context(
            logger,
            "info",
            "Using proxy for outbound requests",
            proxy=redact_sensitive_data(settings.http_proxy),
            event_type="proxy_config",
        )

    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            settings.request_timeout,
            connect=settings.connect_timeout,
        ),
        limits=httpx.Limits(
            max_keepalive_connections=10,
            max_connections=50,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        proxy=settings.http_proxy,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup still runs.
    """
    settings: Settings = app.state.settings
    app.state.startup_time = time.time()

    log_with_context(
        logger,
        "info",
        "Starting Weather Lookup application",
        version=__version__,
        event_type="app_startup",
    )

    client = build_http_client(settings)
    app.state.http_client = client
    log_with_context(
        logger,
        "info",
        "HTTP client initialized successfully",
        read_timeout=settings.request_timeout,
        connect_timeout=settings.connect_timeout,
        event_type="http_client_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Weather Lookup application",
            event_type="app_shutdown",
        )
        app.state.http_client = None
        await client.aclose()
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
