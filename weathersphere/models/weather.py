"""Typed views over the provider's weather payloads.

The backend relays provider JSON untouched; only the dashboard reads
individual fields, through the models below.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

AQI_LABELS = {1: "Good", 2: "Fair", 3: "Moderate", 4: "Poor", 5: "Very Poor"}

# The forecast endpoint returns 3-hour steps, so 8 entries span a day
ENTRIES_PER_DAY = 8


def wind_direction(degrees: float) -> str:
    """Map a wind bearing in degrees to a 16-point compass direction."""
    index = round(degrees / 22.5) % 16
    return COMPASS_POINTS[index]


def _from_epoch(ts: int | None) -> datetime | None:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=UTC)


class CurrentConditions(BaseModel):
    """Current weather conditions for one location."""

    name: str = ""
    country: str = ""
    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    visibility: float | None = None
    wind_speed: float = 0.0
    wind_deg: float | None = None
    condition_main: str = ""
    condition_description: str = ""
    icon: str = ""
    sunrise: datetime | None = None
    sunset: datetime | None = None
    lat: float | None = None
    lon: float | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CurrentConditions":
        """Build from a provider ``weather`` response.

        Raises:
            ValueError: If the payload carries no temperature.
        """
        main = data.get("main") or {}
        if "temp" not in main:
            raise ValueError("Weather payload is missing 'main.temp'")

        conditions = data.get("weather") or [{}]
        condition = conditions[0]
        wind = data.get("wind") or {}
        sys = data.get("sys") or {}
        coord = data.get("coord") or {}

        return cls(
            name=data.get("name", ""),
            country=sys.get("country", ""),
            temp=main["temp"],
            feels_like=main.get("feels_like"),
            temp_min=main.get("temp_min"),
            temp_max=main.get("temp_max"),
            humidity=main.get("humidity"),
            pressure=main.get("pressure"),
            visibility=data.get("visibility"),
            wind_speed=wind.get("speed", 0.0),
            wind_deg=wind.get("deg"),
            condition_main=condition.get("main", ""),
            condition_description=condition.get("description", ""),
            icon=condition.get("icon", ""),
            sunrise=_from_epoch(sys.get("sunrise")),
            sunset=_from_epoch(sys.get("sunset")),
            lat=coord.get("lat"),
            lon=coord.get("lon"),
        )

    @property
    def condition(self) -> str:
        """Lower-cased main condition keyword (e.g. 'rain', 'clear')."""
        return self.condition_main.lower()

    @property
    def display_name(self) -> str:
        """Return 'City, Country' as used for favorites."""
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name

    @property
    def wind_compass(self) -> str:
        if self.wind_deg is None:
            return ""
        return wind_direction(self.wind_deg)


class ForecastDay(BaseModel):
    """One sampled forecast entry used as a daily summary."""

    date: datetime
    temp: float
    temp_min: float
    temp_max: float
    humidity: float | None = None
    condition_main: str = ""
    condition_description: str = ""
    icon: str = ""

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "ForecastDay":
        main = entry.get("main") or {}
        condition = (entry.get("weather") or [{}])[0]
        temp = main.get("temp", 0.0)
        return cls(
            date=datetime.fromtimestamp(entry.get("dt", 0), tz=UTC),
            temp=temp,
            temp_min=main.get("temp_min", temp),
            temp_max=main.get("temp_max", temp),
            humidity=main.get("humidity"),
            condition_main=condition.get("main", ""),
            condition_description=condition.get("description", ""),
            icon=condition.get("icon", ""),
        )


def daily_summaries(forecast: dict[str, Any], days: int = 5) -> list[ForecastDay]:
    """Derive daily summaries by sampling every 8th 3-hour forecast entry."""
    entries = forecast.get("list") or []
    return [ForecastDay.from_entry(entry) for entry in entries[::ENTRIES_PER_DAY][:days]]


def forecast_points(forecast: dict[str, Any], limit: int = ENTRIES_PER_DAY) -> list[ForecastDay]:
    """Return the next ``limit`` 3-hour entries (temperature/humidity chart data)."""
    entries = forecast.get("list") or []
    return [ForecastDay.from_entry(entry) for entry in entries[:limit]]


def temperature_trend(points: list[ForecastDay]) -> str:
    """Get temperature trend over the given forecast points."""
    if len(points) < 2:
        return "→"

    diff = points[-1].temp - points[0].temp
    if diff > 1:
        return "↑"
    elif diff < -1:
        return "↓"
    return "→"


class AirQuality(BaseModel):
    """Air pollution reading for one location."""

    aqi: int
    components: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "AirQuality":
        """Build from a provider ``air_pollution`` response.

        Raises:
            ValueError: If the payload holds no reading.
        """
        readings = data.get("list") or []
        if not readings:
            raise ValueError("Air pollution payload has no readings")
        reading = readings[0]
        return cls(
            aqi=(reading.get("main") or {}).get("aqi", 0),
            components=reading.get("components") or {},
        )

    @property
    def label(self) -> str:
        return AQI_LABELS.get(self.aqi, "Unknown")
