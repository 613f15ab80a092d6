"""IP geolocation lookup from WeatherAPI.com."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_agent.datasources.weatherapi.client import IP_ENDPOINT

if TYPE_CHECKING:
    from weather_agent.datasources.weatherapi.client import WeatherAPIClient


def fetch_ip(client: WeatherAPIClient, address: str) -> bytes:
    """Fetch geolocation for an IPv4/IPv6 address. Returns the raw body."""
    return client.fetch(IP_ENDPOINT, {"q": address})
