"""Main Textual application for the WeatherSphere dashboard."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Header, Input

from .components import AdvicePanel, PlacesPanel, StatusBar, WeatherPanel
from .components.places_panel import PlacesList
from .exceptions import WeatherSphereError
from .models.config import DashboardConfig
from .models.state import AppState, FetchResult
from .services import display
from .services.advisor import advise, spoken_summary
from .services.cache import WeatherCache
from .services.capabilities import (
    Announcer,
    CallbackAnnouncer,
    Connectivity,
    ConfiguredLocator,
    Locator,
    SocketConnectivity,
)
from .services.preferences import Preferences
from .services.storage import JsonFileStore, KeyValueStore
from .services.weather_service import WeatherService

logger = logging.getLogger(__name__)

# Seconds between backend reachability checks
CONNECTIVITY_CHECK_INTERVAL = 15


class WeatherApp(App):
    """Terminal weather dashboard backed by the WeatherSphere API."""

    TITLE = "WeatherSphere"

    CSS = """
    #search {
        margin: 0 1;
    }

    #main {
        height: 1fr;
    }

    #left {
        width: 2fr;
    }

    #right {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("u", "toggle_unit", "Units"),
        Binding("f", "favorite", "Favorite"),
        Binding("l", "locate", "Locate"),
        Binding("t", "toggle_theme", "Theme"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config_path: Path | None = None,
        config: DashboardConfig | None = None,
        store: KeyValueStore | None = None,
        connectivity: Connectivity | None = None,
        locator: Locator | None = None,
        announcer: Announcer | None = None,
        initial_city: str | None = None,
    ) -> None:
        super().__init__()
        self.config = config or DashboardConfig.load_or_default(config_path or "config.json")
        store = store or JsonFileStore(self.config.state_dir)
        self.connectivity = connectivity or SocketConnectivity(self.config.api_base)
        self._online: bool | None = None
        self.preferences = Preferences(store)
        self.service = WeatherService(
            api_base=self.config.api_base,
            cache=WeatherCache(store, ttl_ms=self.config.cache_ttl_ms),
            preferences=self.preferences,
            connectivity=self.connectivity,
            default_city=self.config.default_city,
        )
        self.locator = locator or ConfiguredLocator(self.config.latitude, self.config.longitude)
        self.announcer = announcer or CallbackAnnouncer(
            lambda text: self.notify(text, title="Announcement")
        )
        self.initial_city = initial_city
        self.state = AppState(
            unit=self.preferences.unit(self.config.units),
            theme=self.preferences.theme(),
        )

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Input(placeholder="Search city and press Enter", id="search")
        with Horizontal(id="main"):
            with Vertical(id="left"):
                yield WeatherPanel()
                yield AdvicePanel()
            with Vertical(id="right"):
                yield PlacesPanel()
        yield StatusBar()

    def on_mount(self) -> None:
        self._apply_theme(self.preferences.selected_theme())
        self._render_places()
        self.query_one(StatusBar).set_mode(False, self.state.unit)
        self.run_worker(self._startup(), exclusive=True, group="weather")
        self.set_interval(self.config.refresh_seconds, self.action_refresh)
        self.set_interval(CONNECTIVITY_CHECK_INTERVAL, self._schedule_connectivity_check)

    # Loading

    async def _startup(self) -> None:
        if not await self.service.wait_for_backend():
            self.notify("Server not reachable, cached data only", severity="warning")

        if self.initial_city:
            await self._load_city(self.initial_city)
            return

        position = self.locator.locate()
        if position:
            await self._load_coords(*position)
        else:
            await self._load_city(self.config.default_city)

    async def _check_connectivity(self) -> None:
        online = await self.connectivity.is_online()
        change = display.connectivity_change(self._online, online)
        self._online = online
        if change == "offline":
            self.notify(display.OFFLINE_NOTICE, severity="warning")
        elif change == "online":
            self.notify(display.ONLINE_NOTICE)
            self.action_refresh()

    async def _load_city(self, city: str) -> None:
        status = self.query_one(StatusBar)
        status.set_activity(f"Fetching {city}...")
        try:
            result = await self.service.load_city(city, self.state.unit)
        except WeatherSphereError as e:
            self._set_state(display.apply_failure(self.state, str(e)))
            self.notify(f"Failed to fetch weather data: {e}", severity="error")
            return
        finally:
            status.set_activity("")
        await self._show(result)

    async def _load_coords(self, lat: float, lon: float) -> None:
        self.query_one(StatusBar).set_activity("Fetching your location...")
        try:
            result = await self.service.load_coords(lat, lon, self.state.unit)
        except WeatherSphereError as e:
            self._set_state(display.apply_failure(self.state, str(e)))
            self.notify(f"Failed to fetch weather data: {e}", severity="error")
            return
        finally:
            self.query_one(StatusBar).set_activity("")
        await self._show(result)

    async def _show(self, result: FetchResult) -> None:
        self._set_state(display.apply_result(self.state, result))
        if result.degraded:
            self.notify("Showing cached data (offline)", severity="warning")
            return

        self._render_places()
        current = display.current_conditions(result.weather)
        if current is None:
            return
        if current.lat is not None and current.lon is not None:
            air = await self.service.load_air_quality(current.lat, current.lon)
            self._set_state(display.apply_air_quality(self.state, air))

        voice = self.preferences.voice_settings()
        if voice.should_announce and voice.autoSpeak:
            self.announcer.speak(spoken_summary(current))

    # Rendering

    def _set_state(self, state: AppState) -> None:
        self.state = state
        self.query_one(WeatherPanel).update_state(state)

        recommendations = None
        if state.weather is not None:
            try:
                recommendations = advise(state.weather, state.unit)
            except ValueError as e:
                logger.warning(f"Cannot derive recommendations: {e}")
        self.query_one(AdvicePanel).update_advice(recommendations)

        status = self.query_one(StatusBar)
        status.set_mode(state.degraded, state.unit)
        if state.last_updated:
            status.mark_updated(state.last_updated, self.config.refresh_interval_minutes)

    def _render_places(self) -> None:
        self.query_one(PlacesPanel).update_places(
            self.preferences.favorites(), self.preferences.recent_searches()
        )

    def _apply_theme(self, named: str | None = None) -> None:
        if named and named in self.available_themes:
            self.theme = named
        else:
            self.theme = "textual-light" if self.state.theme == "light" else "textual-dark"

    def watch_theme(self, theme: str) -> None:
        # Also covers themes picked from the command palette
        self.preferences.set_selected_theme(theme)

    # Events and actions

    def on_input_submitted(self, event: Input.Submitted) -> None:
        city = event.value.strip()
        if not city:
            self.notify("Please enter a city name", severity="error")
            return
        event.input.value = ""
        self.run_worker(self._load_city(city), group="weather")

    def on_places_list_place_selected(self, event: PlacesList.PlaceSelected) -> None:
        self.run_worker(self._load_city(event.city), group="weather")

    def _schedule_connectivity_check(self) -> None:
        self.run_worker(self._check_connectivity(), exclusive=True, group="connectivity")

    def action_refresh(self) -> None:
        if self.state.city:
            self.run_worker(self._load_city(self.state.city), group="weather")

    def action_toggle_unit(self) -> None:
        self.state = display.toggle_unit(self.state)
        self.preferences.set_unit(self.state.unit)
        self.query_one(StatusBar).set_mode(self.state.degraded, self.state.unit)
        self.action_refresh()

    def action_toggle_theme(self) -> None:
        self.state = display.toggle_theme(self.state)
        self.preferences.set_theme(self.state.theme)
        self._apply_theme()

    def action_favorite(self) -> None:
        if self.state.weather is None:
            return
        current = display.current_conditions(self.state.weather)
        if current is None or not current.display_name:
            return
        place = current.display_name
        if self.preferences.add_favorite(place):
            self.notify(f"Added {place} to favorites")
        else:
            self.preferences.remove_favorite(place)
            self.notify(f"Removed {place} from favorites")
        self._render_places()

    def action_locate(self) -> None:
        position = self.locator.locate()
        if position is None:
            self.notify("No location configured; set latitude/longitude in config", severity="warning")
            return
        self.run_worker(self._load_coords(*position), group="weather")
