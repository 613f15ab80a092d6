"""Derived data computed from a normalized forecast.

Pure functions of their inputs, run once per successful upstream fetch:

- prayer_times.py - fixed-offset prayer schedule for a date
- hunt_times.py   - hunting windows and moon-phase quality from a day's astro block
"""

from weather_agent.analysis.hunt_times import calculate_hunt_times, hunt_quality
from weather_agent.analysis.prayer_times import calculate_prayer_times

__all__ = ["calculate_hunt_times", "calculate_prayer_times", "hunt_quality"]
