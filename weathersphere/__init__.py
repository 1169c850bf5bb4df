"""WeatherSphere - weather proxy API and terminal dashboard."""

__version__ = "3.0.0"
