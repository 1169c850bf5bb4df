"""Dashboard configuration file."""

import json
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from .query import Units


class DashboardConfig(BaseModel):
    """Settings read from the dashboard's JSON config file."""

    api_base: str = "http://localhost:5000/api"
    default_city: str = Field(default="London", min_length=1, max_length=100)
    units: Units = "metric"
    refresh_interval_minutes: int = Field(default=10, ge=1)
    cache_ttl_minutes: int = Field(default=60, ge=0)
    state_dir: Path = Path(".weathersphere")
    # Fixed position for the "locate" action
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("api_base")
    @classmethod
    def normalize_api_base(cls, v: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid API base '{v}': expected an http or https URL with a host")
        return v.rstrip("/")

    @model_validator(mode="after")
    def check_position(self) -> "DashboardConfig":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self

    @property
    def has_location(self) -> bool:
        return self.latitude is not None

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_minutes * 60 * 1000

    @property
    def refresh_seconds(self) -> int:
        return self.refresh_interval_minutes * 60

    @classmethod
    def load(cls, path: Path | str = "config.json") -> "DashboardConfig":
        """Read and validate a config file.

        Raises:
            FileNotFoundError: If the file does not exist.
            pydantic.ValidationError: If a value is out of range.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return cls.model_validate(json.loads(path.read_text(encoding="utf-8")))

    @classmethod
    def load_or_default(cls, path: Path | str = "config.json") -> "DashboardConfig":
        """Like ``load``, but a missing file yields the defaults."""
        try:
            return cls.load(path)
        except FileNotFoundError:
            return cls()
