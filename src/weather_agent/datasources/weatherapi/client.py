"""WeatherAPI.com client: base URL, constants and the single GET primitive.

API docs: https://www.weatherapi.com/docs/

Every call is one attempt with a fixed timeout. Failures come back as
``TransportError`` (couldn't reach the provider) or ``UpstreamError``
(provider answered with a non-200 status).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from weather_agent.errors import TransportError, UpstreamError
from weather_agent.services.http import DEFAULT_TIMEOUT, create_session

if TYPE_CHECKING:
    from weather_agent.config import Settings

logger = logging.getLogger(__name__)

WEATHER_API_BASE = "https://api.weatherapi.com/v1"

FORECAST_ENDPOINT = "forecast.json"
IP_ENDPOINT = "ip.json"


class WeatherAPIClient:
    """Parameterized GET against the provider, authenticated by API key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHER_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or create_session(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> WeatherAPIClient:
        return cls(
            api_key=settings.weather_api_key,
            base_url=settings.weather_api_base_url,
            timeout=settings.weather_api_timeout,
        )

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def fetch(self, endpoint: str, params: dict[str, str] | None = None) -> bytes:
        """
        GET ``{base_url}/{endpoint}?key=...&<params>`` and return the raw body.

        Args:
            endpoint: Path under the base URL (e.g. ``"forecast.json"``).
            params: Flat query parameters added after the API key.

        Raises:
            TransportError: DNS, connection or timeout failure.
            UpstreamError: Any status other than 200.
        """
        query = {"key": self.api_key, **(params or {})}
        logger.debug("GET %s %s", endpoint, params)
        try:
            resp = self.session.get(self.url(endpoint), params=query, timeout=self.timeout)
        except requests.RequestException as e:
            msg = f"Request to {endpoint} failed: {e}"
            raise TransportError(msg) from e

        if resp.status_code != requests.codes.ok:
            raise UpstreamError(resp.status_code, resp.text)
        body: bytes = resp.content
        return body
