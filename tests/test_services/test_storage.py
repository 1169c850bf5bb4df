"""Tests for local key/value storage."""

from pathlib import Path

import pytest

from weathersphere.services.storage import JsonFileStore, MemoryStore


class TestJsonFileStoreInit:
    """Tests for JsonFileStore initialization."""

    def test_creates_directory(self, temp_dir):
        """Test that the storage directory is created."""
        directory = temp_dir / "state"
        store = JsonFileStore(directory)
        assert directory.exists()
        assert store.enabled is True

    def test_disabled_on_permission_error(self, temp_dir, monkeypatch):
        """Test storage is disabled when directory is not writable."""

        def mock_touch(*args, **kwargs):
            raise PermissionError("Permission denied")

        monkeypatch.setattr(Path, "touch", mock_touch)
        store = JsonFileStore(temp_dir / "readonly")
        assert store.enabled is False

        store.set("key", "value")
        assert store.get("key") is None
        assert store.keys() == []


class TestJsonFileStoreOperations:
    """Tests for get/set/remove."""

    @pytest.fixture
    def store(self, temp_dir):
        return JsonFileStore(temp_dir / "state")

    def test_set_and_get(self, store):
        store.set("recentSearches", ["Paris", "London"])
        assert store.get("recentSearches") == ["Paris", "London"]

    def test_get_missing(self, store):
        assert store.get("missing") is None

    def test_overwrite(self, store):
        store.set("unit", "metric")
        store.set("unit", "imperial")
        assert store.get("unit") == "imperial"

    def test_remove(self, store):
        store.set("theme", "light")
        store.remove("theme")
        assert store.get("theme") is None
        store.remove("theme")  # Should not raise

    def test_keys_keep_original_names(self, store):
        store.set("weather_new york", {"a": 1})
        store.set("theme", "dark")
        assert sorted(store.keys()) == ["theme", "weather_new york"]

    def test_persists_across_instances(self, temp_dir):
        JsonFileStore(temp_dir / "state").set("favorites", ["London, GB"])
        assert JsonFileStore(temp_dir / "state").get("favorites") == ["London, GB"]

    def test_corrupted_file(self, store):
        """Test handling of a corrupted JSON file."""
        store.set("key", {"data": "value"})
        with open(store._get_path("key"), "w") as f:
            f.write("not valid json {{{")
        assert store.get("key") is None

    def test_colliding_file_names(self, store):
        """Keys that sanitize to the same file never read each other's value."""
        store.set("weather_new york", {"city": "new york"})
        assert store.get("weather_new_york") is None
        assert store.get("weather_new york") == {"city": "new york"}

    def test_unserializable_value_is_not_stored(self, store):
        store.set("key", {"bad": object()})
        assert store.get("key") is None


class TestMemoryStore:
    """Tests for the in-memory store."""

    def test_basic_operations(self):
        store = MemoryStore({"unit": "imperial"})
        assert store.get("unit") == "imperial"
        store.set("theme", "light")
        assert sorted(store.keys()) == ["theme", "unit"]
        store.remove("unit")
        assert store.get("unit") is None

    def test_values_are_copied(self):
        store = MemoryStore()
        value = ["Paris"]
        store.set("recentSearches", value)
        value.append("London")
        assert store.get("recentSearches") == ["Paris"]
