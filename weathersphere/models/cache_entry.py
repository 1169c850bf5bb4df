"""Cached weather snapshot model."""

from typing import Any

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Last successful weather + forecast payload for one city."""

    city: str
    weather: dict[str, Any]
    forecast: dict[str, Any]
    timestamp: int  # epoch milliseconds

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Return True while the entry is younger than ``ttl_ms``."""
        return self.age_ms(now_ms) < ttl_ms
