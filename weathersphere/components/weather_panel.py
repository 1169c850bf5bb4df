"""Weather panel component for displaying current conditions and forecast."""

import logging

from textual.app import ComposeResult
from textual.widgets import Label, Static

from ..models.state import AppState
from ..models.weather import (
    AirQuality,
    CurrentConditions,
    daily_summaries,
    forecast_points,
    temperature_trend,
)
from ..services.advisor import needs_umbrella

logger = logging.getLogger(__name__)


def temp_color(temp: float, unit: str = "metric") -> str:
    """Get color for temperature value."""
    celsius = (temp - 32) * 5 / 9 if unit == "imperial" else temp
    if celsius <= 0:
        return "blue"
    elif celsius <= 10:
        return "cyan"
    elif celsius <= 20:
        return "green"
    elif celsius <= 30:
        return "yellow"
    return "red"


class WeatherPanel(Static):
    """Panel displaying current weather, details, air quality and forecast."""

    DEFAULT_CSS = """
    WeatherPanel {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    WeatherPanel #weather-error {
        color: $error;
        display: none;
    }

    WeatherPanel #weather-error.visible {
        display: block;
    }

    WeatherPanel #weather-degraded {
        color: $warning;
        display: none;
    }

    WeatherPanel #weather-degraded.visible {
        display: block;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("[dim]Loading...[/dim]", id="weather-header")
        yield Label("", id="weather-degraded")
        yield Label("", id="weather-error")
        yield Static("", id="weather-details")
        yield Static("", id="weather-air")
        yield Static("", id="weather-forecast")

    def set_loading(self) -> None:
        self.query_one("#weather-header", Static).update("[dim]Loading...[/dim]")

    def update_state(self, state: AppState) -> None:
        """Render the given application state."""
        error_label = self.query_one("#weather-error", Label)
        degraded_label = self.query_one("#weather-degraded", Label)

        if state.error and not state.degraded:
            error_label.update(f"[red]{state.error}[/red]")
            error_label.add_class("visible")
        else:
            error_label.remove_class("visible")

        if state.degraded:
            degraded_label.update("[yellow]Offline - showing cached data[/yellow]")
            degraded_label.add_class("visible")
        else:
            degraded_label.remove_class("visible")

        if state.weather is None:
            self.query_one("#weather-header", Static).update("[bold]Weather[/bold]")
            return

        try:
            current = CurrentConditions.from_payload(state.weather)
        except ValueError as e:
            logger.error(f"Cannot display weather payload: {e}")
            self.query_one("#weather-header", Static).update("[bold]Weather[/bold]")
            return

        self._render_current(current, state)
        self._render_air(state)
        self._render_forecast(state)

    def _render_current(self, current: CurrentConditions, state: AppState) -> None:
        deg = "°F" if state.unit == "imperial" else "°C"
        speed = "mph" if state.unit == "imperial" else "m/s"
        tc = temp_color(current.temp, state.unit)

        trend = ""
        if state.forecast:
            trend = " " + temperature_trend(forecast_points(state.forecast, limit=3))

        self.query_one("#weather-header", Static).update(
            f"[bold]{current.display_name}[/bold]  "
            f"[{tc}]{current.temp:.1f}{deg}[/{tc}]{trend}  {current.condition_description}"
        )

        parts = []
        if current.feels_like is not None:
            parts.append(f"Feels {current.feels_like:.0f}{deg}")
        if current.humidity is not None:
            parts.append(f"Humidity {current.humidity:.0f}%")
        if current.pressure is not None:
            parts.append(f"{current.pressure:.0f} hPa")
        if current.visibility is not None:
            parts.append(f"Vis {current.visibility / 1000:.1f} km")
        parts.append(f"Wind {current.wind_speed:.1f}{speed} {current.wind_compass}".rstrip())
        parts.append(f"Umbrella: {needs_umbrella(current)}")
        if current.sunrise and current.sunset:
            parts.append(
                f"☀ {current.sunrise.strftime('%H:%M')}-{current.sunset.strftime('%H:%M')} UTC"
            )
        self.query_one("#weather-details", Static).update("[dim]" + "  ".join(parts) + "[/dim]")

    def _render_air(self, state: AppState) -> None:
        widget = self.query_one("#weather-air", Static)
        if not state.air_quality:
            widget.update("")
            return
        try:
            air = AirQuality.from_payload(state.air_quality)
        except ValueError:
            widget.update("")
            return
        pm25 = air.components.get("pm2_5")
        extra = f"  PM2.5 {pm25:.1f}" if pm25 is not None else ""
        widget.update(f"Air quality: [bold]{air.label}[/bold] (AQI {air.aqi}){extra}")

    def _render_forecast(self, state: AppState) -> None:
        widget = self.query_one("#weather-forecast", Static)
        days = daily_summaries(state.forecast or {})
        if not days:
            widget.update("[dim]No forecast[/dim]")
            return

        parts = []
        for day in days:
            d = day.date.strftime("%a")
            mc = temp_color(day.temp_min, state.unit)
            xc = temp_color(day.temp_max, state.unit)
            rain = "💧" if "rain" in day.condition_main.lower() else ""
            parts.append(
                f"{d} [{mc}]{day.temp_min:.0f}[/{mc}]/[{xc}]{day.temp_max:.0f}°[/{xc}]{rain}"
            )
        widget.update("  ".join(parts))
