"""Explicit dashboard application state.

Handlers take an ``AppState`` and return a new one instead of mutating
module-level variables, so display logic can be tested without a terminal.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from .query import Units


class AppState(BaseModel):
    """Everything the dashboard shows, in one value."""

    unit: Units = "metric"
    theme: Literal["dark", "light"] = "dark"
    city: str | None = None
    weather: dict[str, Any] | None = None
    forecast: dict[str, Any] | None = None
    air_quality: dict[str, Any] | None = None
    degraded: bool = False
    last_updated: datetime | None = None
    error: str | None = None

    @property
    def has_weather(self) -> bool:
        return self.weather is not None

    @property
    def status_text(self) -> str:
        """Short status line for the current data."""
        if self.error and not self.has_weather:
            return f"Error: {self.error}"
        if self.degraded:
            return "Offline - showing cached data"
        if self.last_updated:
            return f"Updated {self.last_updated.strftime('%H:%M')}"
        return ""


class FetchResult(BaseModel):
    """Outcome of one load cycle: live data, or a degraded cached fallback."""

    city: str
    weather: dict[str, Any]
    forecast: dict[str, Any]
    degraded: bool = False
    error: str | None = None
    fetched_at: datetime = Field(default_factory=datetime.now)
