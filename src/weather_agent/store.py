"""In-memory key/value store with per-entry TTL and a background sweeper.

Entries are written with an absolute expiry (``now + ttl``). Expiry is checked
lazily on read: a stale entry is reported as missing by ``get()`` but stays in
storage until the sweeper removes it, so ``len()`` can count stale entries
between sweeps.

The sweeper is a daemon thread that wakes on a fixed interval (5 minutes by
default, unrelated to any entry's TTL) and physically deletes every expired
entry. It is the only thing that shrinks the store.

Reads share a lock; writes and sweeps are exclusive::

    cache: TTLCache[str] = TTLCache()
    cache.start()
    cache.set("weather:Paris", "...", timedelta(minutes=15))
    value, found = cache.get("weather:Paris")
    cache.stop()

There is no size bound and no LRU eviction.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from types import TracebackType

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SWEEP_INTERVAL = timedelta(minutes=5)


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Writer-preferring: once a writer is waiting, new readers queue behind it
    so a steady stream of ``get()`` calls cannot starve ``set()``.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A stored value and the monotonic time it stops being valid."""

    value: T
    expires_at: float


def _seconds(duration: timedelta | float) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class TTLCache(Generic[T]):
    """Thread-safe TTL cache with lazy expiry and periodic sweep."""

    def __init__(
        self,
        sweep_interval: timedelta | float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sweep_interval = _seconds(sweep_interval)
        if self.sweep_interval <= 0:
            msg = f"sweep_interval must be positive, got {sweep_interval!r}"
            raise ValueError(msg)
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = ReadWriteLock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Read / write
    # ------------------------------------------------------------------

    def get(self, key: str) -> tuple[T | None, bool]:
        """Return ``(value, True)`` for a live entry, else ``(None, False)``.

        An entry whose expiry is at or before now counts as missing. It is
        not deleted here.
        """
        with self._lock.read():
            entry = self._entries.get(key)
            if entry is None or entry.expires_at <= self._clock():
                return None, False
            return entry.value, True

    def set(self, key: str, value: T, ttl: timedelta | float) -> None:
        """Insert or overwrite ``key`` so it expires ``ttl`` from now."""
        seconds = _seconds(ttl)
        if seconds <= 0:
            msg = f"ttl must be positive, got {ttl!r}"
            raise ValueError(msg)
        with self._lock.write():
            self._entries[key] = CacheEntry(value, self._clock() + seconds)

    def sweep(self) -> int:
        """Delete every expired entry. Returns how many were removed."""
        with self._lock.write():
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.expires_at <= now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed %d expired entries", len(expired))
        return len(expired)

    # ------------------------------------------------------------------
    # Introspection (raw storage, stale entries included)
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def keys(self) -> list[str]:
        with self._lock.read():
            return list(self._entries)

    # ------------------------------------------------------------------
    # Background sweeper
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the sweeper thread. No-op if it is already running."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._sweep_loop, name="ttl-cache-sweeper", daemon=True
        )
        self._thread.start()
        logger.info("Cache sweeper started: every %ss", self.sweep_interval)

    def stop(self, timeout: float | None = None) -> None:
        """Signal the sweeper to exit and wait for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            try:
                self.sweep()
            except Exception:
                logger.exception("Cache sweep failed")

    def __enter__(self) -> TTLCache[T]:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
