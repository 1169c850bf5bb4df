"""Services for fetching, caching and interpreting weather data."""

from .advisor import advise
from .cache import WeatherCache
from .preferences import Preferences
from .provider import OpenWeatherClient
from .storage import JsonFileStore, MemoryStore
from .weather_service import WeatherService

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "OpenWeatherClient",
    "Preferences",
    "WeatherCache",
    "WeatherService",
    "advise",
]
