"""State transitions for the dashboard.

Mostly pure functions: state transitions take the current ``AppState`` and
return a new one; the rest are small helpers shared by the app handlers.
"""

import logging
from datetime import datetime
from typing import Any, Literal

from ..models.query import Units
from ..models.state import AppState, FetchResult
from ..models.weather import CurrentConditions

logger = logging.getLogger(__name__)


def apply_result(state: AppState, result: FetchResult) -> AppState:
    """Show a load result (live or cached)."""
    return state.model_copy(
        update={
            "city": result.city,
            "weather": result.weather,
            "forecast": result.forecast,
            "degraded": result.degraded,
            "last_updated": result.fetched_at,
            "error": result.error if result.degraded else None,
        }
    )


def apply_failure(state: AppState, message: str) -> AppState:
    """Record a failed load; previously shown data stays on screen."""
    return state.model_copy(update={"error": message})


def apply_air_quality(state: AppState, payload: dict[str, Any] | None) -> AppState:
    return state.model_copy(update={"air_quality": payload})


def switch_unit(state: AppState, unit: Units) -> AppState:
    """Change the display unit; the caller re-fetches the current city."""
    return state.model_copy(update={"unit": unit})


def toggle_unit(state: AppState) -> AppState:
    return switch_unit(state, "imperial" if state.unit == "metric" else "metric")


def toggle_theme(state: AppState) -> AppState:
    return state.model_copy(update={"theme": "light" if state.theme == "dark" else "dark"})


def needs_refresh(state: AppState, now: datetime, interval_minutes: int) -> bool:
    """True when the last-viewed city is due for its periodic refresh."""
    if state.city is None:
        return False
    if state.last_updated is None:
        return True
    return (now - state.last_updated).total_seconds() >= interval_minutes * 60


OFFLINE_NOTICE = "You are now offline. App will use cached data."
ONLINE_NOTICE = "Back online! Refreshing weather data..."


def connectivity_change(
    was_online: bool | None, online: bool
) -> Literal["offline", "online"] | None:
    """Name the transition between two connectivity checks, if any.

    The first check (``was_online`` is None) only records the state.
    """
    if was_online is None or was_online == online:
        return None
    return "online" if online else "offline"


def current_conditions(weather: dict[str, Any] | None) -> CurrentConditions | None:
    """Parse a current-weather payload, or None if it lacks the expected fields."""
    if weather is None:
        return None
    try:
        return CurrentConditions.from_payload(weather)
    except ValueError as e:
        logger.warning(f"Unexpected weather payload: {e}")
        return None
