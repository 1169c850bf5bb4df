"""OpenWeatherMap client used by the API server."""

import logging
from typing import Any, Literal

import httpx

from ..exceptions import ConfigurationError, UpstreamError
from ..models.query import WeatherQuery

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.openweathermap.org/data/2.5"

Endpoint = Literal["weather", "forecast", "air_pollution"]
ENDPOINTS: frozenset[str] = frozenset({"weather", "forecast", "air_pollution"})


def _error_message(response: httpx.Response) -> str:
    """Extract the provider's error message, falling back to the HTTP status."""
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {response.status_code}"


class OpenWeatherClient:
    """Forwards validated queries to the OpenWeatherMap REST API.

    Makes exactly one request per call; failures are reported as
    ``UpstreamError`` carrying the provider's status code and message.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, endpoint: Endpoint, params: dict[str, Any]) -> Any:
        """Call one provider endpoint and return the decoded JSON body.

        Raises:
            UpstreamError: On a non-2xx response, a transport failure, or an
                undecodable success body.
            ConfigurationError: If no API key is configured.
        """
        if endpoint not in ENDPOINTS:
            raise ValueError(f"Unknown provider endpoint: {endpoint}")
        if not self.api_key:
            raise ConfigurationError("OWM_API_KEY is not set")

        url = f"{self.base_url}/{endpoint}"
        query = {**params, "appid": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=query)
        except httpx.TimeoutException:
            logger.warning(f"Timeout calling provider endpoint {endpoint}")
            raise UpstreamError(None, "Request timeout")
        except httpx.HTTPError as e:
            logger.error(f"Network error calling provider endpoint {endpoint}: {e}")
            raise UpstreamError(None, f"Network error: {e}")

        if not response.is_success:
            message = _error_message(response)
            logger.debug(f"Provider {endpoint} returned {response.status_code}: {message}")
            raise UpstreamError(response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Provider {endpoint} returned invalid JSON: {e}")
            raise UpstreamError(None, f"Failed to parse response: {e}")

    async def current(self, query: WeatherQuery) -> Any:
        """Current conditions by city or coordinates."""
        return await self.fetch("weather", query.provider_params())

    async def forecast(self, query: WeatherQuery) -> Any:
        """5-day / 3-hour forecast by city or coordinates."""
        return await self.fetch("forecast", query.provider_params())

    async def air_pollution(self, lat: float, lon: float) -> Any:
        """Current air pollution reading for a coordinate pair."""
        return await self.fetch("air_pollution", {"lat": lat, "lon": lon})
