"""
Weather proxy API router.

Validates query parameters, forwards one request to the provider and relays
the provider JSON unchanged, or a ``{"error", "details"}`` body on failure.
"""
import logging
from datetime import UTC, datetime
from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .. import __version__
from ..exceptions import QueryValidationError, UpstreamError
from ..models.query import WeatherQuery
from ..services.provider import OpenWeatherClient
from .config import Settings, get_settings

router = APIRouter(tags=["Weather"])

logger = logging.getLogger(__name__)

LOCATION_REQUIRED = "City name OR latitude and longitude are required"
COORDS_REQUIRED = "Latitude and longitude are required"


def get_client(settings: Settings = Depends(get_settings)) -> OpenWeatherClient:
    """Provider client built from process settings."""
    return OpenWeatherClient(
        api_key=settings.owm_api_key,
        base_url=settings.owm_base_url,
        timeout=settings.upstream_timeout,
    )


def build_query(
    q: Optional[str],
    lat: Optional[float],
    lon: Optional[float],
    units: str,
) -> WeatherQuery:
    """Turn raw query parameters into a ``WeatherQuery``.

    A city name takes precedence over coordinates when both are given.
    """
    if q and q.strip():
        lat = lon = None
    elif lat is None or lon is None:
        raise QueryValidationError(LOCATION_REQUIRED)

    try:
        return WeatherQuery(city=q, lat=lat, lon=lon, units=units)
    except ValidationError as e:
        first = e.errors()[0]
        raise QueryValidationError(f"Invalid query: {first['msg']}")


def upstream_failure(error: str, exc: UpstreamError) -> JSONResponse:
    """Relay a provider failure with its status code (500 when unknown)."""
    return JSONResponse(
        status_code=exc.status or 500,
        content={"error": error, "details": exc.message},
    )


async def _relay(
    client: OpenWeatherClient,
    endpoint: Literal["weather", "forecast", "air_pollution"],
    params: dict[str, Any],
    label: str,
    error: str,
) -> Any:
    try:
        data = await client.fetch(endpoint, params)
    except UpstreamError as e:
        logger.error(f"Error fetching {endpoint} for {label}: {e.message} (status {e.status})")
        return upstream_failure(error, e)

    logger.info(f"{endpoint} fetched for: {label}")
    return JSONResponse(content=data)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/")
async def root():
    """API root: basic information and available endpoints."""
    return {
        "name": "WeatherSphere API",
        "version": __version__,
        "status": "operational",
        "docs": "/api/docs",
        "endpoints": {
            "health": "/api/health",
            "weather": "/api/weather?q=<city>|lat=&lon=",
            "forecast": "/api/forecast?q=<city>|lat=&lon=",
            "air_pollution": "/api/air-pollution?lat=&lon=",
        },
    }


@router.get("/api/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Liveness check; reports whether the provider key is configured."""
    return {
        "status": "OK",
        "timestamp": datetime.now(UTC).isoformat(),
        "apiKey": "configured" if settings.has_api_key else "missing",
    }


@router.get("/api/weather")
async def get_weather(
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    units: Literal["metric", "imperial"] = "metric",
    client: OpenWeatherClient = Depends(get_client),
):
    """Current conditions by city name or coordinates."""
    query = build_query(q, lat, lon, units)
    return await _relay(
        client, "weather", query.provider_params(), query.describe(), "Failed to fetch weather"
    )


@router.get("/api/weather/coords")
async def get_weather_by_coords(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    units: Literal["metric", "imperial"] = "metric",
    client: OpenWeatherClient = Depends(get_client),
):
    """Current conditions by coordinates (kept for older clients)."""
    if lat is None or lon is None:
        raise QueryValidationError(COORDS_REQUIRED)
    query = build_query(None, lat, lon, units)
    return await _relay(
        client, "weather", query.provider_params(), query.describe(), "Failed to fetch weather"
    )


@router.get("/api/forecast")
async def get_forecast(
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    units: Literal["metric", "imperial"] = "metric",
    client: OpenWeatherClient = Depends(get_client),
):
    """5-day / 3-hour forecast by city name or coordinates."""
    query = build_query(q, lat, lon, units)
    return await _relay(
        client, "forecast", query.provider_params(), query.describe(), "Failed to fetch forecast"
    )


@router.get("/api/air-pollution")
async def get_air_pollution(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    client: OpenWeatherClient = Depends(get_client),
):
    """Current air pollution for a coordinate pair."""
    if lat is None or lon is None:
        raise QueryValidationError(COORDS_REQUIRED)
    return await _relay(
        client,
        "air_pollution",
        {"lat": lat, "lon": lon},
        f"{lat}, {lon}",
        "Failed to fetch air pollution data",
    )
