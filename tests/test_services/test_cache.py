"""Tests for the offline weather cache."""

import pytest

from weathersphere.services.cache import FRESHNESS_WINDOW_MS, WeatherCache, cache_key
from weathersphere.services.storage import JsonFileStore


class TestCacheKey:
    def test_lower_cased(self):
        assert cache_key("London") == "weather_london"
        assert cache_key("  New York ") == "weather_new york"


class TestWeatherCache:
    """Tests for cache save/lookup operations."""

    @pytest.fixture
    def cache(self, memory_store, clock):
        return WeatherCache(memory_store, clock=clock)

    def test_round_trip_within_window(self, cache, clock, weather_payload, forecast_payload):
        """Test that a fresh entry returns the identical payload."""
        cache.save("london", weather_payload, forecast_payload)
        clock.advance(FRESHNESS_WINDOW_MS - 1)

        entry = cache.lookup("london")
        assert entry is not None
        assert entry.city == "london"
        assert entry.weather == weather_payload
        assert entry.forecast == forecast_payload

    def test_expired_after_window(self, cache, clock, weather_payload, forecast_payload):
        cache.save("london", weather_payload, forecast_payload)
        clock.advance(FRESHNESS_WINDOW_MS)
        assert cache.lookup("london") is None

    def test_stale_entry_stays_in_storage(self, cache, clock, memory_store):
        cache.save("london", {"main": {"temp": 1}}, {})
        clock.advance(FRESHNESS_WINDOW_MS * 2)
        assert cache.lookup("london") is None
        assert memory_store.get("weather_london") is not None

    def test_lookup_is_case_insensitive(self, cache):
        cache.save("London", {"main": {"temp": 1}}, {})
        assert cache.lookup("LONDON") is not None

    def test_lookup_missing(self, cache):
        assert cache.lookup("Atlantis") is None

    def test_save_overwrites(self, cache, clock):
        cache.save("paris", {"version": 1}, {})
        clock.advance(1000)
        cache.save("Paris", {"version": 2}, {})

        entry = cache.lookup("paris")
        assert entry.weather == {"version": 2}
        assert entry.timestamp == clock.now

    def test_timestamp_from_clock(self, cache, clock):
        entry = cache.save("rome", {}, {})
        assert entry.timestamp == clock.now

    def test_corrupted_entry_ignored(self, cache, memory_store):
        memory_store.set("weather_oslo", {"city": "oslo"})
        assert cache.lookup("oslo") is None

    def test_custom_ttl(self, memory_store, clock):
        cache = WeatherCache(memory_store, ttl_ms=1000, clock=clock)
        cache.save("berlin", {}, {})
        clock.advance(999)
        assert cache.lookup("berlin") is not None
        clock.advance(1)
        assert cache.lookup("berlin") is None

    def test_with_file_store(self, temp_dir, clock, weather_payload):
        store = JsonFileStore(temp_dir / "state")
        WeatherCache(store, clock=clock).save("London", weather_payload, {"list": []})

        entry = WeatherCache(JsonFileStore(temp_dir / "state"), clock=clock).lookup("london")
        assert entry.weather == weather_payload
