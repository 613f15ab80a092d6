"""7-day forecast (with air quality and alerts) from WeatherAPI.com."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_agent.datasources.weatherapi.client import FORECAST_ENDPOINT

if TYPE_CHECKING:
    from weather_agent.datasources.weatherapi.client import WeatherAPIClient

FORECAST_DAYS = 7


def forecast_params(location: str, days: int = FORECAST_DAYS) -> dict[str, str]:
    """Query parameters for a forecast request."""
    return {
        "q": location,
        "days": str(days),
        "aqi": "yes",
        "alerts": "yes",
    }


def fetch_forecast(
    client: WeatherAPIClient,
    location: str,
    *,
    days: int = FORECAST_DAYS,
) -> bytes:
    """
    Fetch the multi-day forecast for a location.

    Args:
        client: Configured provider client.
        location: City name, ``"lat,lon"``, postcode, IP, etc.
        days: Number of forecast days (provider max depends on plan).

    Returns:
        Raw response body; decode with ``normalize.parse_payload``.
    """
    return client.fetch(FORECAST_ENDPOINT, forecast_params(location, days))
