"""WeatherAPI.com data source.

Public API:
  - client: WeatherAPIClient (single-attempt GET with timeout), endpoint names
  - forecast: fetch_forecast (7-day forecast, air quality, alerts)
  - ip: fetch_ip (IP geolocation)
  - normalize: Lookup, parse_payload, normalize_forecast, normalize_ip_lookup
"""

from weather_agent.datasources.weatherapi.client import (
    FORECAST_ENDPOINT,
    IP_ENDPOINT,
    WEATHER_API_BASE,
    WeatherAPIClient,
)
from weather_agent.datasources.weatherapi.forecast import fetch_forecast
from weather_agent.datasources.weatherapi.ip import fetch_ip
from weather_agent.datasources.weatherapi.normalize import (
    Lookup,
    normalize_forecast,
    normalize_ip_lookup,
    parse_payload,
)

__all__ = [
    "FORECAST_ENDPOINT",
    "IP_ENDPOINT",
    "WEATHER_API_BASE",
    "Lookup",
    "WeatherAPIClient",
    "fetch_forecast",
    "fetch_ip",
    "normalize_forecast",
    "normalize_ip_lookup",
    "parse_payload",
]
