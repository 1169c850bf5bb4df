"""Local key/value storage for dashboard state.

``KeyValueStore`` is the capability the rest of the dashboard depends on;
``JsonFileStore`` persists each key as a JSON file and ``MemoryStore`` keeps
everything in a dict (used in tests).
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Persistent per-user key/value store holding JSON values."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing or unreadable."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""


class MemoryStore(KeyValueStore):
    """In-memory store."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        # Round-trip through JSON so callers never share mutable state with the store
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """File-based store: one ``<key>.json`` file per key."""

    def __init__(self, directory: Path | str = ".weathersphere"):
        self.directory = Path(directory)
        self._enabled = True

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Test write permission
            test_file = self.directory / ".test"
            test_file.touch()
            test_file.unlink()
        except (PermissionError, OSError) as e:
            logger.warning(f"Local storage disabled - cannot write to {directory}: {e}")
            self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
        return self.directory / f"{safe_key}.json"

    def get(self, key: str) -> Any | None:
        if not self._enabled:
            return None

        path = self._get_path(key)
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            stored_key, value = data["key"], data["value"]
        except (json.JSONDecodeError, KeyError, TypeError, OSError) as e:
            logger.warning(f"Failed to read stored value for {key}: {e}")
            return None

        # Distinct keys can share a sanitized file name
        if stored_key != key:
            logger.debug(f"{path.name} holds {stored_key!r}, not {key!r}")
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        if not self._enabled:
            return

        path = self._get_path(key)
        try:
            data = json.dumps({"key": key, "value": value})
            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
            logger.debug(f"Stored {key}")
        except (TypeError, ValueError, OSError) as e:
            logger.warning(f"Failed to store {key}: {e}")

    def remove(self, key: str) -> None:
        self._get_path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self._enabled:
            return []

        found = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                with open(path, encoding="utf-8") as f:
                    found.append(json.load(f)["key"])
            except (json.JSONDecodeError, KeyError, TypeError, OSError):
                continue
        return found
