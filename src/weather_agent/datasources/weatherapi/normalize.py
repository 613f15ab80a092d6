"""Normalize WeatherAPI.com payloads into ``weather_agent.schemas`` models.

Field access goes through ``Lookup``, a chain of safe accessors: indexing a
missing key, a non-object, or ``None`` yields an empty ``Lookup`` rather than
raising, and the terminal ``as_*`` methods turn absence or a wrong type into
the zero value. One malformed field never sinks the whole response.

Numbers are accepted as JSON ints or floats. Numeric strings are *not*
parsed, they become ``0``.
"""

from __future__ import annotations

import json
import math
from typing import Any

from weather_agent.errors import ParseError
from weather_agent.schemas import (
    AirQuality,
    Astronomy,
    AstroData,
    Condition,
    CurrentWeather,
    DayData,
    Forecast,
    ForecastDay,
    HourlyData,
    IPLookupResponse,
    Location,
    WeatherAlert,
    WeatherResponse,
)

#: The provider returns at most 24 hourly points per day.
MAX_HOURLY_POINTS = 24


class Lookup:
    """Optional nested lookup over decoded JSON.

    >>> Lookup({"a": {"b": 1.5}})["a"]["b"].as_float()
    1.5
    >>> Lookup({"a": "x"})["a"]["b"].as_float()
    0.0
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def __getitem__(self, key: str) -> Lookup:
        return self.get(key)

    def get(self, key: str) -> Lookup:
        if isinstance(self.value, dict):
            return Lookup(self.value.get(key))
        return Lookup()

    def __bool__(self) -> bool:
        return self.value is not None

    def is_object(self) -> bool:
        return isinstance(self.value, dict)

    def as_str(self) -> str:
        return self.value if isinstance(self.value, str) else ""

    def as_float(self) -> float:
        # bool is an int subclass; JSON true/false is not a number here
        if isinstance(self.value, bool):
            return 0.0
        if isinstance(self.value, (int, float)) and math.isfinite(self.value):
            return float(self.value)
        return 0.0

    def as_int(self) -> int:
        return int(self.as_float())

    def as_bool(self) -> bool:
        return self.value if isinstance(self.value, bool) else False

    def as_list(self) -> list[Lookup]:
        """Elements of a JSON array, each wrapped. Non-arrays give ``[]``."""
        if isinstance(self.value, list):
            return [Lookup(item) for item in self.value]
        return []

    def objects(self) -> list[Lookup]:
        """Like ``as_list`` but drops elements that aren't JSON objects."""
        return [item for item in self.as_list() if item.is_object()]


def parse_payload(raw: bytes | str) -> dict[str, Any]:
    """Decode a response body that must be a JSON object.

    Raises:
        ParseError: Body isn't valid JSON or its top level isn't an object.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        msg = f"Malformed JSON from provider: {e}"
        raise ParseError(msg) from e
    if not isinstance(data, dict):
        msg = f"Expected a JSON object from provider, got {type(data).__name__}"
        raise ParseError(msg)
    return data


# =============================================================================
# Field groups
# =============================================================================


def _condition(node: Lookup) -> Condition:
    return Condition(
        text=node["text"].as_str(),
        icon=node["icon"].as_str(),
        code=node["code"].as_int(),
    )


def _location(node: Lookup) -> Location:
    return Location(
        name=node["name"].as_str(),
        region=node["region"].as_str(),
        country=node["country"].as_str(),
        lat=node["lat"].as_float(),
        lon=node["lon"].as_float(),
        tz_id=node["tz_id"].as_str(),
        localtime=node["localtime"].as_str(),
        localtime_epoch=node["localtime_epoch"].as_int(),
    )


def _air_quality(node: Lookup) -> AirQuality:
    return AirQuality(
        co=node["co"].as_float(),
        no2=node["no2"].as_float(),
        o3=node["o3"].as_float(),
        so2=node["so2"].as_float(),
        pm2_5=node["pm2_5"].as_float(),
        pm10=node["pm10"].as_float(),
        us_epa_index=node["us-epa-index"].as_int(),
        gb_defra_index=node["gb-defra-index"].as_int(),
    )


def _current(node: Lookup) -> CurrentWeather:
    return CurrentWeather(
        last_updated=node["last_updated"].as_str(),
        temp_c=node["temp_c"].as_float(),
        temp_f=node["temp_f"].as_float(),
        is_day=node["is_day"].as_int(),
        condition=_condition(node["condition"]),
        wind_kph=node["wind_kph"].as_float(),
        wind_mph=node["wind_mph"].as_float(),
        wind_dir=node["wind_dir"].as_str(),
        pressure_mb=node["pressure_mb"].as_float(),
        precip_mm=node["precip_mm"].as_float(),
        humidity=node["humidity"].as_int(),
        cloud=node["cloud"].as_int(),
        feelslike_c=node["feelslike_c"].as_float(),
        feelslike_f=node["feelslike_f"].as_float(),
        vis_km=node["vis_km"].as_float(),
        uv=node["uv"].as_float(),
        gust_kph=node["gust_kph"].as_float(),
        air_quality=_air_quality(node["air_quality"]),
    )


def _day(node: Lookup) -> DayData:
    return DayData(
        maxtemp_c=node["maxtemp_c"].as_float(),
        mintemp_c=node["mintemp_c"].as_float(),
        avgtemp_c=node["avgtemp_c"].as_float(),
        maxwind_kph=node["maxwind_kph"].as_float(),
        totalprecip_mm=node["totalprecip_mm"].as_float(),
        avghumidity=node["avghumidity"].as_int(),
        daily_will_it_rain=node["daily_will_it_rain"].as_int(),
        daily_chance_of_rain=node["daily_chance_of_rain"].as_int(),
        daily_will_it_snow=node["daily_will_it_snow"].as_int(),
        daily_chance_of_snow=node["daily_chance_of_snow"].as_int(),
        condition=_condition(node["condition"]),
        uv=node["uv"].as_float(),
    )


def _astro(node: Lookup) -> AstroData:
    return AstroData(
        sunrise=node["sunrise"].as_str(),
        sunset=node["sunset"].as_str(),
        moonrise=node["moonrise"].as_str(),
        moonset=node["moonset"].as_str(),
        moon_phase=node["moon_phase"].as_str(),
        moon_illumination=node["moon_illumination"].as_str(),
        is_moon_up=node["is_moon_up"].as_int(),
        is_sun_up=node["is_sun_up"].as_int(),
    )


def _hour(node: Lookup) -> HourlyData:
    return HourlyData(
        time_epoch=node["time_epoch"].as_int(),
        time=node["time"].as_str(),
        temp_c=node["temp_c"].as_float(),
        temp_f=node["temp_f"].as_float(),
        is_day=node["is_day"].as_int(),
        condition=_condition(node["condition"]),
        wind_kph=node["wind_kph"].as_float(),
        wind_dir=node["wind_dir"].as_str(),
        humidity=node["humidity"].as_int(),
        cloud=node["cloud"].as_int(),
        feelslike_c=node["feelslike_c"].as_float(),
        will_it_rain=node["will_it_rain"].as_int(),
        chance_of_rain=node["chance_of_rain"].as_int(),
        will_it_snow=node["will_it_snow"].as_int(),
        chance_of_snow=node["chance_of_snow"].as_int(),
        uv=node["uv"].as_float(),
    )


def _forecast_day(node: Lookup) -> ForecastDay:
    hours = node["hour"].objects()[:MAX_HOURLY_POINTS]
    return ForecastDay(
        date=node["date"].as_str(),
        date_epoch=node["date_epoch"].as_int(),
        day=_day(node["day"]),
        astro=_astro(node["astro"]),
        hour=[_hour(h) for h in hours],
    )


def _alert(node: Lookup) -> WeatherAlert:
    return WeatherAlert(
        headline=node["headline"].as_str(),
        msgtype=node["msgtype"].as_str(),
        severity=node["severity"].as_str(),
        urgency=node["urgency"].as_str(),
        areas=node["areas"].as_str(),
        category=node["category"].as_str(),
        certainty=node["certainty"].as_str(),
        event=node["event"].as_str(),
        note=node["note"].as_str(),
        effective=node["effective"].as_str(),
        expires=node["expires"].as_str(),
        desc=node["desc"].as_str(),
        instruction=node["instruction"].as_str(),
    )


# =============================================================================
# Public API
# =============================================================================


def normalize_forecast(payload: dict[str, Any]) -> WeatherResponse:
    """
    Build a ``WeatherResponse`` from a decoded ``forecast.json`` payload.

    Derived blocks (prayer and hunt times) are left at their zero values;
    the agent fills them in afterwards.

    Args:
        payload: Decoded provider response (see ``parse_payload``).

    Returns:
        The normalized response. Never raises for missing or mistyped fields.
    """
    root = Lookup(payload)
    current = root["current"]
    days = [_forecast_day(d) for d in root["forecast"]["forecastday"].objects()]

    return WeatherResponse(
        location=_location(root["location"]),
        current=_current(current),
        forecast=Forecast(days=days),
        astronomy=Astronomy.from_astro(days[0].astro) if days else Astronomy(),
        air_quality=_air_quality(current["air_quality"]),
        alerts=[_alert(a) for a in root["alerts"]["alert"].objects()],
    )


def normalize_ip_lookup(raw: bytes | str) -> IPLookupResponse:
    """
    Decode and normalize an ``ip.json`` response body.

    Raises:
        ParseError: Body isn't a JSON object.
    """
    node = Lookup(parse_payload(raw))
    return IPLookupResponse(
        ip=node["ip"].as_str(),
        type=node["type"].as_str(),
        continent_code=node["continent_code"].as_str(),
        continent_name=node["continent_name"].as_str(),
        country_code=node["country_code"].as_str(),
        country_name=node["country_name"].as_str(),
        is_eu=node["is_eu"].as_bool(),
        city=node["city"].as_str(),
        region=node["region"].as_str(),
        lat=node["lat"].as_float(),
        lon=node["lon"].as_float(),
        tz_id=node["tz_id"].as_str(),
        localtime=node["localtime"].as_str(),
        localtime_epoch=node["localtime_epoch"].as_int(),
    )
