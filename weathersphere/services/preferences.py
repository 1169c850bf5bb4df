"""User preferences persisted in the local store."""

import logging
from typing import Literal

from pydantic import BaseModel, ValidationError

from ..models.query import Units
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

MAX_RECENT_SEARCHES = 5

RECENT_SEARCHES_KEY = "recentSearches"
FAVORITES_KEY = "favorites"
UNIT_KEY = "unit"
THEME_KEY = "theme"
SELECTED_THEME_KEY = "selectedTheme"
VOICE_SETTINGS_KEY = "voiceSettings"


class VoiceSettings(BaseModel):
    """Spoken announcement switches (field names match the stored JSON)."""

    enabled: bool = True
    announcements: bool = True
    autoSpeak: bool = False

    @property
    def should_announce(self) -> bool:
        return self.enabled and self.announcements


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class Preferences:
    """Typed accessors over the dashboard's persisted keys."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # Recent searches

    def recent_searches(self) -> list[str]:
        return _string_list(self.store.get(RECENT_SEARCHES_KEY))[:MAX_RECENT_SEARCHES]

    def add_recent_search(self, city: str) -> list[str]:
        """Move ``city`` to the front, dropping case-insensitive duplicates."""
        city = city.strip()
        if not city:
            return self.recent_searches()

        searches = [s for s in self.recent_searches() if s.lower() != city.lower()]
        searches.insert(0, city)
        searches = searches[:MAX_RECENT_SEARCHES]
        self.store.set(RECENT_SEARCHES_KEY, searches)
        return searches

    # Favorites

    def favorites(self) -> list[str]:
        return _string_list(self.store.get(FAVORITES_KEY))

    def add_favorite(self, place: str) -> bool:
        """Append a 'City, Country' entry. Returns False if already present."""
        favorites = self.favorites()
        if place in favorites:
            return False
        favorites.append(place)
        self.store.set(FAVORITES_KEY, favorites)
        return True

    def remove_favorite(self, place: str) -> bool:
        favorites = self.favorites()
        if place not in favorites:
            return False
        favorites.remove(place)
        self.store.set(FAVORITES_KEY, favorites)
        return True

    # Display settings

    def unit(self, default: Units = "metric") -> Units:
        value = self.store.get(UNIT_KEY)
        if value in ("metric", "imperial"):
            return value
        return default

    def set_unit(self, unit: Units) -> None:
        self.store.set(UNIT_KEY, unit)

    def theme(self) -> Literal["dark", "light"]:
        return "light" if self.store.get(THEME_KEY) == "light" else "dark"

    def set_theme(self, theme: Literal["dark", "light"]) -> None:
        self.store.set(THEME_KEY, theme)

    def selected_theme(self) -> str | None:
        value = self.store.get(SELECTED_THEME_KEY)
        return value if isinstance(value, str) else None

    def set_selected_theme(self, name: str) -> None:
        self.store.set(SELECTED_THEME_KEY, name)

    # Voice

    def voice_settings(self) -> VoiceSettings:
        raw = self.store.get(VOICE_SETTINGS_KEY)
        if raw is None:
            return VoiceSettings()
        try:
            return VoiceSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid voice settings: {e}")
            return VoiceSettings()

    def set_voice_settings(self, settings: VoiceSettings) -> None:
        self.store.set(VOICE_SETTINGS_KEY, settings.model_dump())
