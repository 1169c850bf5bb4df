"""WeatherSphere API server: an OpenWeatherMap proxy."""

from .app import create_app

__all__ = ["create_app"]
