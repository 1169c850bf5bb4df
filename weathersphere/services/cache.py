"""Offline weather cache keyed by city."""

import logging
import time
from typing import Any, Callable

from pydantic import ValidationError

from ..models.cache_entry import CacheEntry
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

# Cached snapshots are used as an offline fallback for one hour
FRESHNESS_WINDOW_MS = 60 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def cache_key(city: str) -> str:
    return f"weather_{city.strip().lower()}"


class WeatherCache:
    """Last successful weather + forecast payload per city.

    Entries are overwritten on every successful fetch and never evicted;
    entries older than the freshness window are simply ignored on read.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl_ms: int = FRESHNESS_WINDOW_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.ttl_ms = ttl_ms
        self.clock = clock

    def save(self, city: str, weather: dict[str, Any], forecast: dict[str, Any]) -> CacheEntry:
        """Store a snapshot for ``city``, replacing any previous one."""
        entry = CacheEntry(city=city, weather=weather, forecast=forecast, timestamp=self.clock())
        self.store.set(cache_key(city), entry.model_dump())
        logger.debug(f"Cached weather for {city}")
        return entry

    def lookup(self, city: str) -> CacheEntry | None:
        """Return the entry for ``city`` if present and still fresh."""
        raw = self.store.get(cache_key(city))
        if raw is None:
            return None

        try:
            entry = CacheEntry.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupted cache entry for {city}: {e}")
            return None

        now = self.clock()
        if not entry.is_fresh(now, self.ttl_ms):
            logger.debug(f"Cache expired for {city} (age {entry.age_ms(now) / 1000:.0f}s)")
            return None
        return entry
