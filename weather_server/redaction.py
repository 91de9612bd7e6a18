"""Log and error-message redaction for provider credentials.

OpenWeatherMap authenticates with an ``appid`` query parameter, so the API
key ends up inside every request URL. Anything that may render such a URL
(aiohttp exception messages, structured log fields) is passed through here.

Usage:
    Structlog: Add `redact_secrets` processor to the processor chain.
    Stdlib: Attach `SecretRedactionFilter` to a logging handler.
"""

from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping
from typing import Any


SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Credentials passed as query parameters (appid=..., api_key=..., token=...)
    (
        re.compile(r"([?&](?:appid|api_key|apikey|key|token|secret)=)[^&#\s\"']+", re.IGNORECASE),
        r"\1[REDACTED]",
    ),
    # Key/value pairs in free text or dict reprs (appid: ..., 'api_key': '...')
    (
        re.compile(
            r'(["\']?(?:appid|api[_-]?key|apikey|secret[_-]?key)["\']?\s*[:=]\s*)["\']?[A-Za-z0-9_\-./+=]{8,}["\']?',
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-./+=]{10,}", re.IGNORECASE), "Bearer [REDACTED]"),
    # user:pass@host
    (
        re.compile(r"(://[^:/\s]+:)[^@\s]+(@)"),
        r"\1[REDACTED]\2",
    ),
]

SENSITIVE_FIELD_NAMES = frozenset(
    {
        "appid",
        "api_key",
        "apikey",
        "openweathermap_api_key",
        "secret",
        "password",
        "token",
        "authorization",
    }
)


def redact_string(value: str) -> str:
    """Apply all secret patterns to a string."""
    result = value
    for pattern, replacement in SECRET_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def _is_sensitive_key(key: str) -> bool:
    return key.lower().replace("-", "_") in SENSITIVE_FIELD_NAMES


def _redact_value(key: str, value: Any) -> Any:
    if _is_sensitive_key(key):
        if isinstance(value, str) and value:
            return "[REDACTED]"
        return value

    if isinstance(value, str):
        return redact_string(value)

    if isinstance(value, dict):
        return {k: _redact_value(str(k), v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return type(value)(_redact_value("", item) for item in value)

    return value


def redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor redacting credentials from every event field.

    Must run before the renderer.
    """
    return {key: _redact_value(key, value) for key, value in event_dict.items()}


class SecretRedactionFilter(logging.Filter):
    """Stdlib logging filter that redacts credentials from log records.

    Attach it to handlers rather than loggers: handler filters also see
    records propagated from child loggers such as ``aiohttp.client``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: _redact_value(k, v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(_redact_value("", arg) if isinstance(arg, str) else arg for arg in record.args)

        if record.exc_text:
            record.exc_text = redact_string(record.exc_text)

        return True
