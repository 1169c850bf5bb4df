"""Dashboard-side weather loading through the WeatherSphere API.

Every load is one online attempt (weather, then forecast). Successful
results are cached per city; when the attempt fails or the backend is
unreachable a fresh cached snapshot is served instead and flagged as
degraded.
"""

import asyncio
import logging
from typing import Any

import httpx

from ..exceptions import BackendError, ClientNetworkError, QueryValidationError
from ..models.query import Units
from ..models.state import FetchResult
from .cache import WeatherCache
from .capabilities import Connectivity, StaticConnectivity
from .preferences import Preferences

logger = logging.getLogger(__name__)

# Delay before the single re-check while waiting for the backend at startup
STARTUP_RETRY_DELAY = 2.0


class WeatherService:
    """Loads weather for the dashboard with offline fallback."""

    def __init__(
        self,
        api_base: str,
        cache: WeatherCache,
        preferences: Preferences,
        connectivity: Connectivity | None = None,
        default_city: str = "London",
        timeout: float = 30.0,
        startup_retry_delay: float = STARTUP_RETRY_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.cache = cache
        self.preferences = preferences
        self.connectivity = connectivity or StaticConnectivity(online=True)
        self.default_city = default_city
        self.timeout = timeout
        self.startup_retry_delay = startup_retry_delay
        self._transport = transport

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a backend route and return its JSON body.

        Raises:
            ClientNetworkError: If the backend cannot be reached.
            BackendError: If the backend answers with a non-2xx status.
        """
        url = f"{self.api_base}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise ClientNetworkError(f"Could not reach server: {e}") from e

        if not response.is_success:
            message, details = "Server error - please try again in a moment", ""
            try:
                body = response.json()
                message = body.get("error") or message
                details = body.get("details") or ""
            except (ValueError, AttributeError):
                pass
            raise BackendError(response.status_code, message, details)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(response.status_code, f"Invalid response from server: {e}") from e

    async def ping(self) -> bool:
        """Return True if the backend health check answers."""
        try:
            await self._get("/health")
            return True
        except (ClientNetworkError, BackendError) as e:
            logger.debug(f"Backend health check failed: {e}")
            return False

    async def wait_for_backend(self) -> bool:
        """Check the backend, re-trying exactly once after a fixed delay."""
        if await self.ping():
            return True
        logger.warning(f"Backend not reachable, re-checking in {self.startup_retry_delay:.0f}s")
        await asyncio.sleep(self.startup_retry_delay)
        return await self.ping()

    async def fetch(self, params: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        """Fetch current weather and forecast for one query."""
        weather = await self._get("/weather", params)
        forecast = await self._get("/forecast", params)
        return weather, forecast

    def _from_cache(self, city: str, reason: str) -> FetchResult | None:
        entry = self.cache.lookup(city)
        if entry is None:
            return None
        logger.warning(f"Showing cached data for {city}: {reason}")
        return FetchResult(
            city=entry.city,
            weather=entry.weather,
            forecast=entry.forecast,
            degraded=True,
            error=reason,
        )

    async def load_city(self, city: str, units: Units = "metric") -> FetchResult:
        """Load weather for a city, falling back to a fresh cached snapshot.

        Raises:
            QueryValidationError: If the city name is blank.
            ClientNetworkError: If offline or unreachable with no usable cache.
            BackendError: If the backend rejected the request with no usable cache.
        """
        city = city.strip()
        if not city:
            raise QueryValidationError("Please enter a city name")

        if not await self.connectivity.is_online():
            cached = self._from_cache(city, "offline")
            if cached:
                return cached
            raise ClientNetworkError("You are offline and no cached data is available")

        try:
            weather, forecast = await self.fetch({"q": city, "units": units})
        except (ClientNetworkError, BackendError) as e:
            logger.error(f"Error fetching weather for {city}: {e}")
            cached = self._from_cache(city, str(e))
            if cached:
                return cached
            raise

        self.cache.save(city, weather, forecast)
        self.preferences.add_recent_search(city)
        logger.info(f"Weather fetched for: {city}")
        return FetchResult(city=city, weather=weather, forecast=forecast)

    async def load_coords(self, lat: float, lon: float, units: Units = "metric") -> FetchResult:
        """Load weather for a position; falls back to the default city on failure."""
        try:
            weather, forecast = await self.fetch({"lat": lat, "lon": lon, "units": units})
        except (ClientNetworkError, BackendError) as e:
            logger.error(f"Error fetching weather for {lat}, {lon}: {e}")
            return await self.load_city(self.default_city, units)

        city = weather.get("name") or f"{lat}, {lon}"
        if weather.get("name"):
            self.cache.save(city, weather, forecast)
        logger.info(f"Weather fetched for coordinates: {lat}, {lon} ({city})")
        return FetchResult(city=city, weather=weather, forecast=forecast)

    async def load_air_quality(self, lat: float, lon: float) -> dict[str, Any] | None:
        """Air pollution payload, or None if it could not be loaded."""
        try:
            return await self._get("/air-pollution", {"lat": lat, "lon": lon})
        except (ClientNetworkError, BackendError) as e:
            logger.warning(f"Air quality unavailable for {lat}, {lon}: {e}")
            return None
