"""Data models for the dashboard."""

from .advice import Advice, Recommendations
from .cache_entry import CacheEntry
from .config import DashboardConfig
from .query import WeatherQuery
from .state import AppState, FetchResult
from .weather import AirQuality, CurrentConditions, ForecastDay

__all__ = [
    "Advice",
    "AirQuality",
    "AppState",
    "CacheEntry",
    "CurrentConditions",
    "DashboardConfig",
    "FetchResult",
    "ForecastDay",
    "Recommendations",
    "WeatherQuery",
]
