"""Logging helpers with sensitive data redaction."""

import re

# Sensitive parameters to redact from URLs
SENSITIVE_PARAMS = [
    "appid",
    "api_key",
    "apikey",
    "token",
    "password",
    "secret",
    "key",
    "access_token",
    "authorization",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"([?&]){param}=([^&\s\"]+)"
        redacted = re.sub(pattern, rf"\g<1>{param}=***REDACTED***", redacted, flags=re.IGNORECASE)
    return redacted
