"""Daily prayer schedule from fixed sunrise/sunset anchors.

This is a simplified model, not solar-angle astronomy: sunrise is pinned to
06:00 and sunset to 18:30 on the requested date, and every prayer is a fixed
offset from one of those anchors. Latitude and longitude are accepted (and
echoed on the result) but do not affect the times.

    Fajr     sunrise - 1h30
    Sunrise  06:00
    Dhuhr    sunrise + 6h30
    Asr      sunrise + 10h
    Sunset   18:30
    Maghrib  sunset + 5m
    Isha     sunset + 1h30
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from weather_agent.schemas import PrayerTimes

SUNRISE = time(6, 0)
SUNSET = time(18, 30)

FAJR_BEFORE_SUNRISE = timedelta(minutes=90)
DHUHR_AFTER_SUNRISE = timedelta(hours=6, minutes=30)
ASR_AFTER_SUNRISE = timedelta(hours=10)
MAGHRIB_AFTER_SUNSET = timedelta(minutes=5)
ISHA_AFTER_SUNSET = timedelta(minutes=90)

TIME_FORMAT = "%H:%M"


def calculate_prayer_times(lat: float, lon: float, on: date) -> PrayerTimes:
    """
    Prayer times for ``on``, formatted ``HH:MM`` (24-hour).

    Args:
        lat: Latitude of the location (not used by the model).
        lon: Longitude of the location (not used by the model).
        on: Calendar date the schedule is for.
    """
    sunrise = datetime.combine(on, SUNRISE)
    sunset = datetime.combine(on, SUNSET)

    def fmt(dt: datetime) -> str:
        return dt.strftime(TIME_FORMAT)

    return PrayerTimes(
        fajr=fmt(sunrise - FAJR_BEFORE_SUNRISE),
        sunrise=fmt(sunrise),
        dhuhr=fmt(sunrise + DHUHR_AFTER_SUNRISE),
        asr=fmt(sunrise + ASR_AFTER_SUNRISE),
        sunset=fmt(sunset),
        maghrib=fmt(sunset + MAGHRIB_AFTER_SUNSET),
        isha=fmt(sunset + ISHA_AFTER_SUNSET),
        date=on.isoformat(),
        latitude=lat,
        longitude=lon,
    )
