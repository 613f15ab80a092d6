"""Hunting windows and a moon-phase quality rating for one day."""

from __future__ import annotations

from weather_agent.schemas import AstroData, HuntQuality, HuntTimes

# Fixed wall-clock window edges, in the provider's 12-hour format.
MORNING_END = "10:00 AM"
EVENING_START = "4:00 PM"


def hunt_quality(moon_phase: str) -> HuntQuality:
    """
    Rate hunting conditions from the provider's moon phase name.

    Full moon is ``Fair``, new moon is ``Excellent``, anything else ``Good``.
    Matching is a case-sensitive substring test.
    """
    if "Full" in moon_phase:
        return HuntQuality.FAIR
    if "New" in moon_phase:
        return HuntQuality.EXCELLENT
    return HuntQuality.GOOD


def calculate_hunt_times(astro: AstroData) -> HuntTimes:
    """Morning window sunrise to 10 AM, evening window 4 PM to sunset."""
    return HuntTimes(
        morning_start=astro.sunrise,
        morning_end=MORNING_END,
        evening_start=EVENING_START,
        evening_end=astro.sunset,
        moon_phase=astro.moon_phase,
        quality=hunt_quality(astro.moon_phase),
    )
