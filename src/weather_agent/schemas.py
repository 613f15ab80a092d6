"""
Domain models for the weather agent.

Pydantic models for the aggregate we serve. Field names (or aliases, where
the provider's key isn't a valid identifier) match the JSON we emit, so
``model.model_dump(by_alias=True)`` is the wire format.

Every field has a zero-value default: the normalizer fills in what the
provider sent and leaves the rest at ``""`` / ``0`` / ``0.0``. Models are
frozen; a response is built once on cache miss and never mutated.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class _Frozen(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}


# =============================================================================
# Location / current conditions
# =============================================================================


class Condition(_Frozen):
    """Provider weather condition (text, icon URL, numeric code)."""

    text: str = ""
    icon: str = ""
    code: int = 0


class Location(_Frozen):
    """Resolved location for a query."""

    name: str = ""
    region: str = ""
    country: str = ""
    lat: float = 0.0
    lon: float = 0.0
    tz_id: str = ""
    localtime: str = ""
    localtime_epoch: int = 0


class AirQuality(_Frozen):
    """Pollutant concentrations (μg/m³) and the US/UK index bands."""

    co: float = 0.0
    no2: float = 0.0
    o3: float = 0.0
    so2: float = 0.0
    pm2_5: float = 0.0
    pm10: float = 0.0
    us_epa_index: int = Field(default=0, alias="us-epa-index")
    gb_defra_index: int = Field(default=0, alias="gb-defra-index")


class CurrentWeather(_Frozen):
    """Current conditions at the location."""

    last_updated: str = ""
    temp_c: float = 0.0
    temp_f: float = 0.0
    is_day: int = 0
    condition: Condition = Field(default_factory=Condition)
    wind_kph: float = 0.0
    wind_mph: float = 0.0
    wind_dir: str = ""
    pressure_mb: float = 0.0
    precip_mm: float = 0.0
    humidity: int = 0
    cloud: int = 0
    feelslike_c: float = 0.0
    feelslike_f: float = 0.0
    vis_km: float = 0.0
    uv: float = 0.0
    gust_kph: float = 0.0
    air_quality: AirQuality = Field(default_factory=AirQuality)


# =============================================================================
# Forecast
# =============================================================================


class DayData(_Frozen):
    """Daily summary for one forecast day."""

    maxtemp_c: float = 0.0
    mintemp_c: float = 0.0
    avgtemp_c: float = 0.0
    maxwind_kph: float = 0.0
    totalprecip_mm: float = 0.0
    avghumidity: int = 0
    daily_will_it_rain: int = 0
    daily_chance_of_rain: int = 0
    daily_will_it_snow: int = 0
    daily_chance_of_snow: int = 0
    condition: Condition = Field(default_factory=Condition)
    uv: float = 0.0


class AstroData(_Frozen):
    """Per-day astronomy, times in the provider's local ``hh:mm AM`` format."""

    sunrise: str = ""
    sunset: str = ""
    moonrise: str = ""
    moonset: str = ""
    moon_phase: str = ""
    moon_illumination: str = ""
    is_moon_up: int = 0
    is_sun_up: int = 0


class HourlyData(_Frozen):
    """One hourly forecast point."""

    time_epoch: int = 0
    time: str = ""
    temp_c: float = 0.0
    temp_f: float = 0.0
    is_day: int = 0
    condition: Condition = Field(default_factory=Condition)
    wind_kph: float = 0.0
    wind_dir: str = ""
    humidity: int = 0
    cloud: int = 0
    feelslike_c: float = 0.0
    will_it_rain: int = 0
    chance_of_rain: int = 0
    will_it_snow: int = 0
    chance_of_snow: int = 0
    uv: float = 0.0


class ForecastDay(_Frozen):
    """A forecast day: summary, astronomy and up to 24 hourly points."""

    date: str = ""
    date_epoch: int = 0
    day: DayData = Field(default_factory=DayData)
    astro: AstroData = Field(default_factory=AstroData)
    hour: list[HourlyData] = Field(default_factory=list)


class Forecast(_Frozen):
    """Ordered forecast days (7 when the provider honours ``days=7``)."""

    days: list[ForecastDay] = Field(default_factory=list, alias="forecastday")


class Astronomy(_Frozen):
    """Today's astronomy, copied from the first forecast day."""

    sunrise: str = ""
    sunset: str = ""
    moonrise: str = ""
    moonset: str = ""
    moon_phase: str = ""
    moon_illumination: str = ""

    @classmethod
    def from_astro(cls, astro: AstroData) -> Astronomy:
        return cls(
            sunrise=astro.sunrise,
            sunset=astro.sunset,
            moonrise=astro.moonrise,
            moonset=astro.moonset,
            moon_phase=astro.moon_phase,
            moon_illumination=astro.moon_illumination,
        )


class WeatherAlert(_Frozen):
    """Government weather alert as relayed by the provider."""

    headline: str = ""
    msgtype: str = ""
    severity: str = ""
    urgency: str = ""
    areas: str = ""
    category: str = ""
    certainty: str = ""
    event: str = ""
    note: str = ""
    effective: str = ""
    expires: str = ""
    desc: str = ""
    instruction: str = ""


# =============================================================================
# Derived data
# =============================================================================


class PrayerTimes(_Frozen):
    """Daily prayer schedule, ``HH:MM`` 24-hour local time."""

    fajr: str = ""
    sunrise: str = ""
    dhuhr: str = ""
    asr: str = ""
    sunset: str = ""
    maghrib: str = ""
    isha: str = ""
    date: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


class HuntQuality(StrEnum):
    """Hunting conditions rating, driven by the moon phase."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"


class HuntTimes(_Frozen):
    """Morning and evening hunting windows for a day."""

    morning_start: str = ""
    morning_end: str = ""
    evening_start: str = ""
    evening_end: str = ""
    moon_phase: str = ""
    quality: str = ""


# =============================================================================
# Aggregates (cached values)
# =============================================================================


class WeatherResponse(_Frozen):
    """Everything served for a location; cached under ``weather:<location>``."""

    location: Location = Field(default_factory=Location)
    current: CurrentWeather = Field(default_factory=CurrentWeather)
    forecast: Forecast = Field(default_factory=Forecast)
    astronomy: Astronomy = Field(default_factory=Astronomy)
    air_quality: AirQuality = Field(default_factory=AirQuality)
    alerts: list[WeatherAlert] = Field(default_factory=list)
    prayer_times: PrayerTimes = Field(default_factory=PrayerTimes)
    hunt_times: HuntTimes = Field(default_factory=HuntTimes)
    timestamp: datetime | None = None
    expires_at: datetime | None = None


class IPLookupResponse(_Frozen):
    """IP geolocation; cached under ``ip:<address>``."""

    ip: str = ""
    type: str = ""
    continent_code: str = ""
    continent_name: str = ""
    country_code: str = ""
    country_name: str = ""
    is_eu: bool = False
    city: str = ""
    region: str = ""
    lat: float = 0.0
    lon: float = 0.0
    tz_id: str = ""
    localtime: str = ""
    localtime_epoch: int = 0
