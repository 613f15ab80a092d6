"""
Error taxonomy for the fetch-merge-compute pipeline.

    WeatherAgentError
    ├── ValidationError     bad caller input, raised before any I/O
    ├── FetchError          the upstream provider could not be used
    │   ├── TransportError  DNS / connection / timeout
    │   └── UpstreamError   non-200 response (body kept for diagnostics)
    └── ParseError          response body is not a JSON object

None of these are ever cached.
"""

from __future__ import annotations


class WeatherAgentError(Exception):
    """Base class for every error raised by weather_agent."""


class ValidationError(WeatherAgentError):
    """Caller supplied an empty or malformed argument."""


class FetchError(WeatherAgentError):
    """Upstream request failed."""


class TransportError(FetchError):
    """The request could not be sent or did not complete."""


class UpstreamError(FetchError):
    """The provider answered with a non-200 status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error ({status_code}): {body}")


class ParseError(WeatherAgentError):
    """The provider's payload is not a JSON object."""
