"""Weather query model shared by the API routes and the dashboard."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

Units = Literal["metric", "imperial"]


class WeatherQuery(BaseModel):
    """A lookup by city name or by coordinates, never both."""

    city: str | None = None
    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)
    units: Units = "metric"

    @field_validator("city")
    @classmethod
    def strip_city(cls, v: str | None) -> str | None:
        """Treat blank city names as absent."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def check_location(self) -> "WeatherQuery":
        """Exactly one of city or a full coordinate pair must be present."""
        has_coords = self.lat is not None and self.lon is not None
        if self.city and (self.lat is not None or self.lon is not None):
            raise ValueError("Give either a city or coordinates, not both")
        if not self.city and not has_coords:
            raise ValueError("City name OR latitude and longitude are required")
        return self

    @property
    def by_city(self) -> bool:
        return self.city is not None

    def provider_params(self) -> dict[str, str | float]:
        """Query parameters understood by the provider."""
        if self.city:
            return {"q": self.city, "units": self.units}
        return {"lat": self.lat, "lon": self.lon, "units": self.units}

    def describe(self) -> str:
        """Short human-readable location for logs and messages."""
        if self.city:
            return self.city
        return f"{self.lat}, {self.lon}"
