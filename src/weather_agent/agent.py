"""
Weather agent: cache-first orchestration of fetch, normalize and derive.

Per request::

    validate -> cache hit?  -> return cached value
                cache miss  -> fetch -> normalize -> derive -> cache.set -> return

Weather and IP lookups share one ``TTLCache`` under separate key namespaces
(``weather:`` and ``ip:``). Nothing is cached on failure.

Concurrent misses for the same key are collapsed by ``InFlight``: the first
caller fetches, the others block on its result (or its exception) instead of
hitting the provider again.

Example:
    from weather_agent.agent import WeatherAgent
    from weather_agent.config import get_settings

    with WeatherAgent(get_settings()) as agent:
        paris = agent.get_weather("Paris")
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Generic, TypeVar, cast

from weather_agent.analysis import calculate_hunt_times, calculate_prayer_times
from weather_agent.datasources.weatherapi import (
    WeatherAPIClient,
    fetch_forecast,
    fetch_ip,
    normalize_forecast,
    normalize_ip_lookup,
    parse_payload,
)
from weather_agent.errors import ValidationError, WeatherAgentError
from weather_agent.store import TTLCache

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from weather_agent.config import Settings
    from weather_agent.schemas import IPLookupResponse, WeatherResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

WEATHER_PREFIX = "weather:"
IP_PREFIX = "ip:"


class InFlight(Generic[T]):
    """Collapse concurrent calls for the same key into one.

    The first caller for a key runs ``fn``; callers arriving while it runs
    wait for the same outcome. The key is released once ``fn`` finishes, so
    later calls run ``fn`` again.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, Future[T]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls)

    def do(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if future is None:
                future = Future()
                self._calls[key] = future

        if not leader:
            return future.result()

        try:
            result = fn()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                del self._calls[key]


def _require(value: str, name: str) -> None:
    if not value or not value.strip():
        msg = f"{name} cannot be empty"
        raise ValidationError(msg)


class WeatherAgent:
    """Serves weather and IP lookups from cache, fetching on miss."""

    def __init__(
        self,
        settings: Settings,
        client: WeatherAPIClient | None = None,
        cache: TTLCache[WeatherResponse | IPLookupResponse] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.client = client if client is not None else WeatherAPIClient.from_settings(settings)
        self.cache: TTLCache[WeatherResponse | IPLookupResponse] = (
            cache
            if cache is not None
            else TTLCache(sweep_interval=settings.cache_cleanup_interval)
        )
        self._today = today
        self._inflight: InFlight[WeatherResponse | IPLookupResponse] = InFlight()
        logger.info("Agent initialized (cache duration %s)", settings.cache_duration)

    # ------------------------------------------------------------------
    # Lifecycle: the cache sweeper runs while the agent is started
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.cache.start()

    def stop(self) -> None:
        self.cache.stop()

    def __enter__(self) -> WeatherAgent:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_weather(self, location: str) -> WeatherResponse:
        """
        Weather, forecast, astronomy, alerts and derived times for a location.

        Raises:
            ValidationError: ``location`` is blank.
            TransportError: Provider unreachable or timed out.
            UpstreamError: Provider returned a non-200 status.
            ParseError: Provider body isn't a JSON object.
        """
        _require(location, "location")
        key = f"{WEATHER_PREFIX}{location}"
        value = self._get_or_load(key, lambda: self._load_weather(location))
        return cast("WeatherResponse", value)

    def get_ip_lookup(self, address: str) -> IPLookupResponse:
        """
        Geolocation for an IP address. Same error contract as ``get_weather``.
        """
        _require(address, "address")
        key = f"{IP_PREFIX}{address}"
        value = self._get_or_load(key, lambda: self._load_ip(address))
        return cast("IPLookupResponse", value)

    # ------------------------------------------------------------------
    # Cache plumbing
    # ------------------------------------------------------------------

    def _get_or_load(
        self,
        key: str,
        loader: Callable[[], WeatherResponse | IPLookupResponse],
    ) -> WeatherResponse | IPLookupResponse:
        cached, found = self.cache.get(key)
        if found:
            logger.info("Cache hit for %s", key)
            return cast("WeatherResponse | IPLookupResponse", cached)
        logger.info("Cache miss for %s", key)
        return self._inflight.do(key, lambda: self._load_and_store(key, loader))

    def _load_and_store(
        self,
        key: str,
        loader: Callable[[], WeatherResponse | IPLookupResponse],
    ) -> WeatherResponse | IPLookupResponse:
        # A previous leader may have stored the key after our miss.
        cached, found = self.cache.get(key)
        if found:
            return cast("WeatherResponse | IPLookupResponse", cached)
        value = loader()
        self.cache.set(key, value, self.settings.cache_duration)
        return value

    # ------------------------------------------------------------------
    # Loaders (cache miss path)
    # ------------------------------------------------------------------

    def _load_weather(self, location: str) -> WeatherResponse:
        logger.info("Fetching weather for: %s", location)
        try:
            payload = parse_payload(fetch_forecast(self.client, location))
        except WeatherAgentError as e:
            logger.error("Weather fetch for %s failed: %s", location, e)
            raise
        return self.augment(normalize_forecast(payload))

    def _load_ip(self, address: str) -> IPLookupResponse:
        logger.info("Looking up IP: %s", address)
        try:
            return normalize_ip_lookup(fetch_ip(self.client, address))
        except WeatherAgentError as e:
            logger.error("IP lookup for %s failed: %s", address, e)
            raise

    def augment(self, response: WeatherResponse) -> WeatherResponse:
        """
        Attach prayer and hunt times plus fetch/expiry timestamps.

        Derived times use the first forecast day and today's date. With no
        forecast days they stay at their zero values.
        """
        now = datetime.now(UTC)
        update: dict[str, object] = {
            "timestamp": now,
            "expires_at": now + self.settings.cache_duration,
        }
        days = response.forecast.days
        if days:
            update["prayer_times"] = calculate_prayer_times(
                response.location.lat, response.location.lon, self._today()
            )
            update["hunt_times"] = calculate_hunt_times(days[0].astro)
        return response.model_copy(update=update)
