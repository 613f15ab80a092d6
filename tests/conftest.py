"""Shared fixtures: a fake clock and WeatherAPI.com-shaped payloads."""

from __future__ import annotations

import json
from typing import Any

import pytest

from weather_agent.config import Settings


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        weather_api_key="test-key",
        weather_api_base_url="https://api.example.test/v1",
        log_file="",
        _env_file=None,  # type: ignore[call-arg]
    )


def make_hour(i: int) -> dict[str, Any]:
    return {
        "time_epoch": 1760832000 + i * 3600,
        "time": f"2026-10-19 {i:02d}:00",
        "temp_c": 10.0 + i * 0.5,
        "condition": {"text": "Clear", "icon": "//cdn/113.png", "code": 1000},
        "chance_of_rain": 10,
    }


def make_day(date: str, moon_phase: str = "Waxing Crescent") -> dict[str, Any]:
    return {
        "date": date,
        "date_epoch": 1760832000,
        "day": {
            "maxtemp_c": 18.2,
            "mintemp_c": 9.1,
            "avgtemp_c": 13.4,
            "daily_chance_of_rain": 20,
            "daily_chance_of_snow": 0,
            "condition": {"text": "Sunny", "icon": "//cdn/113.png", "code": 1000},
            "uv": 3.0,
        },
        "astro": {
            "sunrise": "07:52 AM",
            "sunset": "06:41 PM",
            "moonrise": "05:10 AM",
            "moonset": "05:03 PM",
            "moon_phase": moon_phase,
            "moon_illumination": "4",
            "is_moon_up": 0,
            "is_sun_up": 1,
        },
        "hour": [make_hour(i) for i in range(24)],
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    """A trimmed ``forecast.json`` response for Paris."""
    return {
        "location": {
            "name": "Paris",
            "region": "Ile-de-France",
            "country": "France",
            "lat": 48.87,
            "lon": 2.33,
            "tz_id": "Europe/Paris",
            "localtime_epoch": 1760870400,
            "localtime": "2026-10-19 12:40",
        },
        "current": {
            "last_updated": "2026-10-19 12:30",
            "temp_c": 14.0,
            "temp_f": 57.2,
            "is_day": 1,
            "condition": {"text": "Partly cloudy", "icon": "//cdn/116.png", "code": 1003},
            "wind_kph": 11.2,
            "wind_dir": "SW",
            "humidity": 72,
            "feelslike_c": 13.1,
            "vis_km": 10.0,
            "uv": 2,
            "air_quality": {
                "co": 223.4,
                "no2": 12.9,
                "o3": 51.0,
                "so2": 1.2,
                "pm2_5": 4.6,
                "pm10": 6.1,
                "us-epa-index": 1,
                "gb-defra-index": 1,
            },
        },
        "forecast": {
            "forecastday": [make_day(f"2026-10-{19 + i}") for i in range(7)],
        },
        "alerts": {
            "alert": [
                {
                    "headline": "Wind warning",
                    "severity": "Moderate",
                    "urgency": "Expected",
                    "areas": "Paris",
                    "event": "Wind",
                    "expires": "2026-10-20T06:00:00+00:00",
                    "desc": "Strong gusts expected overnight.",
                }
            ]
        },
    }


@pytest.fixture
def forecast_body(forecast_payload: dict[str, Any]) -> bytes:
    return json.dumps(forecast_payload).encode()


@pytest.fixture
def ip_body() -> bytes:
    return json.dumps(
        {
            "ip": "8.8.8.8",
            "type": "ipv4",
            "continent_code": "NA",
            "continent_name": "North America",
            "country_code": "US",
            "country_name": "United States of America",
            "is_eu": False,
            "city": "Mountain View",
            "region": "California",
            "lat": 37.4,
            "lon": -122.08,
            "tz_id": "America/Los_Angeles",
            "localtime_epoch": 1760870400,
            "localtime": "2026-10-19 3:40",
        }
    ).encode()
