"""Tests for configuration models."""

import json

import pytest
from pydantic import ValidationError

from weathersphere.api.config import Settings
from weathersphere.models.config import DashboardConfig


class TestDashboardConfig:
    """Tests for DashboardConfig model."""

    def test_defaults(self):
        """Test default values are applied."""
        config = DashboardConfig()
        assert config.api_base == "http://localhost:5000/api"
        assert config.default_city == "London"
        assert config.units == "metric"
        assert config.refresh_interval_minutes == 10
        assert config.cache_ttl_minutes == 60
        assert config.has_location is False

    def test_trailing_slash_stripped(self):
        """Test that the API base loses its trailing slash."""
        config = DashboardConfig(api_base="https://weather.example.com/api/")
        assert config.api_base == "https://weather.example.com/api"

    @pytest.mark.parametrize("url", ["ftp://example.com/api", "https://", "localhost:5000"])
    def test_invalid_api_base(self, url):
        """Test that anything but an absolute http(s) URL is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            DashboardConfig(api_base=url)
        assert "Invalid API base" in str(exc_info.value)

    def test_invalid_units(self):
        with pytest.raises(ValidationError):
            DashboardConfig(units="kelvin")

    def test_latitude_out_of_range(self):
        with pytest.raises(ValidationError):
            DashboardConfig(latitude=91, longitude=0)

    def test_longitude_out_of_range(self):
        with pytest.raises(ValidationError):
            DashboardConfig(latitude=0, longitude=-181)

    def test_position_needs_both_coordinates(self):
        with pytest.raises(ValidationError) as exc_info:
            DashboardConfig(latitude=1.0)
        assert "set together" in str(exc_info.value)

    def test_refresh_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            DashboardConfig(refresh_interval_minutes=0)

    def test_derived_values(self):
        config = DashboardConfig(latitude=1.0, longitude=2.0, cache_ttl_minutes=2, refresh_interval_minutes=3)
        assert config.has_location is True
        assert config.cache_ttl_ms == 120_000
        assert config.refresh_seconds == 180


class TestDashboardConfigLoading:
    """Tests for loading configuration from disk."""

    def test_load(self, sample_config_file):
        """Test loading a config file."""
        config = DashboardConfig.load(sample_config_file)
        assert config.default_city == "Paris"
        assert config.units == "imperial"
        assert config.refresh_interval_minutes == 5
        assert config.has_location is True

    def test_load_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            DashboardConfig.load(temp_dir / "missing.json")

    def test_load_or_default_missing_file(self, temp_dir):
        config = DashboardConfig.load_or_default(temp_dir / "missing.json")
        assert config == DashboardConfig()

    def test_load_invalid_content(self, temp_dir):
        path = temp_dir / "config.json"
        with open(path, "w") as f:
            json.dump({"units": "kelvin"}, f)
        with pytest.raises(ValidationError):
            DashboardConfig.load(path)


class TestServerSettings:
    """Tests for the API server settings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OWM_API_KEY", "abc123")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)
        assert settings.owm_api_key == "abc123"
        assert settings.port == 8080
        assert settings.is_production is True
        assert settings.has_api_key is True

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OWM_API_KEY", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.has_api_key is False
        assert settings.is_production is False

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
