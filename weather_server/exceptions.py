"""Error taxonomy for weather tool invocations."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_PROTOCOL = "upstream_protocol"
    FORMATTING_INVARIANT = "formatting_invariant"


class WeatherToolError(RuntimeError):
    """Base error for a failed weather query."""

    kind: ErrorKind


class ConfigurationError(WeatherToolError):
    """Raised when the provider API key is not configured."""

    kind = ErrorKind.CONFIGURATION


class UpstreamUnavailableError(WeatherToolError):
    """Error raised when the provider cannot be reached (network, timeout, 5xx)."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class UpstreamProtocolError(WeatherToolError):
    """Error raised when the provider answers with something we cannot use."""

    kind = ErrorKind.UPSTREAM_PROTOCOL


class FormattingInvariantError(WeatherToolError):
    """Raised when a payload reaches the formatter without weather conditions."""

    kind = ErrorKind.FORMATTING_INVARIANT
