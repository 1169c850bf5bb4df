"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from weathersphere.services.storage import MemoryStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_store():
    """Empty in-memory key/value store."""
    return MemoryStore()


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def weather_payload():
    """Provider response for current weather in London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {
            "temp": 15.2,
            "feels_like": 14.6,
            "temp_min": 13.9,
            "temp_max": 16.4,
            "pressure": 1012,
            "humidity": 77,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 230},
        "dt": 1700000000,
        "sys": {"country": "GB", "sunrise": 1699989000, "sunset": 1700021000},
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def forecast_payload():
    """Provider response for a 5-day forecast: 40 entries at 3-hour steps."""
    entries = []
    for i in range(40):
        temp = 10.0 + i * 0.25
        entries.append(
            {
                "dt": 1700000000 + i * 3 * 3600,
                "main": {
                    "temp": temp,
                    "temp_min": temp - 1,
                    "temp_max": temp + 1,
                    "humidity": 60 + (i % 10),
                },
                "weather": [{"main": "Clouds", "description": "few clouds", "icon": "02d"}],
            }
        )
    return {"cod": "200", "cnt": 40, "list": entries, "city": {"name": "London", "country": "GB"}}


@pytest.fixture
def air_payload():
    """Provider response for air pollution."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "list": [
            {
                "main": {"aqi": 2},
                "components": {"co": 230.3, "no2": 14.2, "o3": 50.1, "pm2_5": 6.4, "pm10": 9.1},
                "dt": 1700000000,
            }
        ],
    }


@pytest.fixture
def sample_config_file(temp_dir):
    """Create a sample dashboard config file for testing."""
    config_path = temp_dir / "config.json"
    with open(config_path, "w") as f:
        json.dump(
            {
                "api_base": "http://localhost:5000/api",
                "default_city": "Paris",
                "units": "imperial",
                "refresh_interval_minutes": 5,
                "latitude": 48.8566,
                "longitude": 2.3522,
            },
            f,
        )
    return config_path
