"""Weather Agent - cached weather, prayer-time and hunting-window API.

Architecture::

    datasources/   WeatherAPI.com client, fetch functions, payload normalizer
    store.py       In-memory TTL cache with background sweeper
    analysis/      Derived data (prayer times, hunt windows)
    agent.py       Orchestration: cache -> fetch -> normalize -> derive -> cache
    server.py      JSON HTTP API (http.server, one thread per request)
    services/      Shared utilities (HTTP session factory)

Data flow: request -> agent -> store (hit) | datasources -> analysis -> store
"""

__version__ = "0.1.0"

from weather_agent.config import Settings, get_settings  # noqa: E402

__all__ = ["Settings", "__version__", "get_settings"]
