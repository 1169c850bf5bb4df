"""UI components for the dashboard."""

from .advice_panel import AdvicePanel
from .places_panel import PlacesPanel
from .status_bar import StatusBar
from .weather_panel import WeatherPanel

__all__ = ["AdvicePanel", "PlacesPanel", "StatusBar", "WeatherPanel"]
