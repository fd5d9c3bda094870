"""Outbound request helper shared by the geocoding and weather clients.

Every provider failure is classified here, once, into the lookup error
taxonomy:

- no response received (connect failure, timeout) -> UpstreamUnavailableException
- response received with a failure status         -> UpstreamErrorException
- response body that is not JSON                  -> MalformedPayloadException
- request could not be built                      -> RequestSetupException
"""

from typing import Any

import httpx

from weather_lookup.exceptions import (
    MalformedPayloadException,
    RequestSetupException,
    UpstreamErrorException,
    UpstreamUnavailableException,
)
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, str | int | float],
    *,
    upstream: str,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Args:
        client: Shared HTTP client
        url: Provider endpoint
        params: Query parameters (may include the API credential)
        upstream: Provider label used in logs and error details

    Returns:
        Decoded JSON body

    Raises:
        UpstreamUnavailableException: No response was received
        UpstreamErrorException: Provider answered with a failure status
        MalformedPayloadException: Provider answered with a non-JSON body
        RequestSetupException: The request could not be constructed
    """
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        _log_failure(upstream, "Upstream returned error status", e, status_code=e.response.status_code)
        raise UpstreamErrorException(
            details={"upstream": upstream, "status_code": e.response.status_code, "error_type": "http_status"},
        ) from e
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
        _log_failure(upstream, "Failed to build upstream request", e)
        raise RequestSetupException(details={"upstream": upstream, "error_type": "request_setup"}) from e
    except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError) as e:
        error_type = "timeout" if isinstance(e, httpx.TimeoutException) else "network_error"
        _log_failure(upstream, "Upstream unreachable", e)
        raise UpstreamUnavailableException(details={"upstream": upstream, "error_type": error_type}) from e
    except httpx.HTTPError as e:
        # A response arrived but could not be consumed (bad encoding, redirect loop)
        _log_failure(upstream, "Upstream response could not be processed", e)
        raise UpstreamErrorException(details={"upstream": upstream, "error_type": "response_error"}) from e
    except (UnicodeError, ValueError, TypeError) as e:
        _log_failure(upstream, "Failed to build upstream request", e)
        raise RequestSetupException(details={"upstream": upstream, "error_type": "request_setup"}) from e

    try:
        return response.json()
    except ValueError as e:
        _log_failure(upstream, "Upstream returned non-JSON body", e, status_code=response.status_code)
        raise MalformedPayloadException(details={"upstream": upstream, "error_type": "invalid_json"}) from e


def _log_failure(upstream: str, message: str, error: Exception, **fields: Any) -> None:
    log_with_context(
        logger,
        "warning",
        message,
        upstream=upstream,
        error=redact_sensitive_data(str(error)),
        error_type=type(error).__name__,
        event_type="upstream_error",
        **fields,
    )
