"""Rule-based clothing, activity and health advice.

Each rule table is an ordered list of ``(predicate, advice)`` pairs and the
first matching predicate wins. Thresholds are in °C and m/s; imperial
payloads are converted before matching.
"""

from typing import Any, Callable

from ..models.advice import Advice, Recommendations
from ..models.query import Units
from ..models.weather import CurrentConditions

Rule = tuple[Callable[[CurrentConditions], bool], Advice]

MPH_TO_MS = 0.44704


def _always(_: CurrentConditions) -> bool:
    return True


CLOTHING_RULES: list[Rule] = [
    (
        lambda w: w.temp < 0,
        Advice(
            title="Clothing Advice",
            text="Very cold! Wear heavy winter coat, gloves, scarf, and warm boots. Layer up!",
            tags=["Heavy Coat", "Gloves", "Scarf", "Winter Boots"],
            icon="snowflake",
        ),
    ),
    (
        lambda w: w.temp < 10,
        Advice(
            title="Clothing Advice",
            text="Cold weather. Wear a warm jacket, long pants, and closed shoes.",
            tags=["Warm Jacket", "Long Pants", "Closed Shoes"],
            icon="snowman",
        ),
    ),
    (
        lambda w: w.temp < 20,
        Advice(
            title="Clothing Advice",
            text="Cool weather. Light jacket or sweater recommended. Jeans are perfect.",
            tags=["Light Jacket", "Sweater", "Jeans"],
            icon="tshirt",
        ),
    ),
    (
        lambda w: w.temp < 25,
        Advice(
            title="Clothing Advice",
            text="Pleasant weather! Light clothes, t-shirt, and comfortable shoes.",
            tags=["T-shirt", "Light Clothes", "Comfortable Shoes"],
            icon="tshirt",
        ),
    ),
    (
        lambda w: w.temp < 30,
        Advice(
            title="Clothing Advice",
            text="Warm weather. Wear light, breathable clothes. Shorts and t-shirt ideal.",
            tags=["Shorts", "T-shirt", "Breathable Fabric"],
            icon="sun",
        ),
    ),
    (
        _always,
        Advice(
            title="Clothing Advice",
            text="Very hot! Wear minimal, light-colored clothes. Stay hydrated!",
            tags=["Light Colors", "Minimal Clothing", "Sun Hat"],
            icon="fire",
        ),
    ),
]

ACTIVITY_RULES: list[Rule] = [
    (
        lambda w: "rain" in w.condition,
        Advice(
            title="Activity Suggestions",
            text=(
                "Rainy day! Perfect for indoor activities like reading, movies, or visiting "
                "museums. Bring an umbrella if you must go out."
            ),
            tags=["Indoor Activities", "Museums", "Reading", "Movies"],
            icon="umbrella",
        ),
    ),
    (
        lambda w: "snow" in w.condition,
        Advice(
            title="Activity Suggestions",
            text="Snowy weather! Great for winter sports, building snowmen, or cozy indoor activities.",
            tags=["Winter Sports", "Skiing", "Indoor Fun", "Hot Drinks"],
            icon="skiing",
        ),
    ),
    (
        lambda w: w.temp > 20 and "clear" in w.condition,
        Advice(
            title="Activity Suggestions",
            text=(
                "Beautiful clear weather! Perfect for outdoor activities like hiking, cycling, "
                "picnics, or sports."
            ),
            tags=["Hiking", "Cycling", "Picnics", "Outdoor Sports"],
            icon="mountain",
        ),
    ),
    (
        lambda w: w.wind_speed > 5,
        Advice(
            title="Activity Suggestions",
            text=(
                "Windy conditions! Good for flying kites or wind sports, but be careful with "
                "outdoor activities."
            ),
            tags=["Kite Flying", "Wind Sports", "Be Careful"],
            icon="wind",
        ),
    ),
    (
        _always,
        Advice(
            title="Activity Suggestions",
            text=(
                "Moderate weather. Good for most outdoor activities. Walking, jogging, or casual "
                "outdoor dining."
            ),
            tags=["Walking", "Jogging", "Outdoor Dining"],
            icon="walking",
        ),
    ),
]

HEALTH_RULES: list[Rule] = [
    (
        lambda w: w.humidity is not None and w.humidity > 70,
        Advice(
            title="Health Tips",
            text=(
                "High humidity! Stay hydrated and avoid strenuous outdoor activities. "
                "Use air conditioning if available."
            ),
            tags=["Hydrate", "Take It Easy"],
            icon="tint",
        ),
    ),
    (
        lambda w: w.humidity is not None and w.humidity < 30,
        Advice(
            title="Health Tips",
            text="Low humidity! Use moisturizer and stay hydrated. Consider using a humidifier indoors.",
            tags=["Moisturizer", "Hydrate", "Humidifier"],
            icon="tint-slash",
        ),
    ),
    (
        lambda w: w.temp > 30,
        Advice(
            title="Health Tips",
            text="Hot weather! Drink plenty of water, avoid direct sunlight, and take frequent breaks in shade.",
            tags=["Water", "Shade", "Sunscreen"],
            icon="heartbeat",
        ),
    ),
    (
        _always,
        Advice(
            title="Health Tips",
            text="Pleasant conditions! Great weather for outdoor activities. Remember to stay hydrated.",
            tags=["Stay Hydrated"],
            icon="heart",
        ),
    ),
]


def first_match(rules: list[Rule], weather: CurrentConditions) -> Advice:
    """Return the advice of the first rule whose predicate holds."""
    for predicate, advice in rules:
        if predicate(weather):
            return advice
    raise LookupError("No rule matched")


def to_metric(weather: CurrentConditions, units: Units) -> CurrentConditions:
    """Express temperatures in °C and wind speed in m/s."""
    if units == "metric":
        return weather

    def f_to_c(value: float | None) -> float | None:
        return None if value is None else (value - 32) * 5 / 9

    return weather.model_copy(
        update={
            "temp": f_to_c(weather.temp),
            "feels_like": f_to_c(weather.feels_like),
            "temp_min": f_to_c(weather.temp_min),
            "temp_max": f_to_c(weather.temp_max),
            "wind_speed": weather.wind_speed * MPH_TO_MS,
        }
    )


def _conditions(weather: CurrentConditions | dict[str, Any]) -> CurrentConditions:
    if isinstance(weather, CurrentConditions):
        return weather
    return CurrentConditions.from_payload(weather)


def advise(weather: CurrentConditions | dict[str, Any], units: Units = "metric") -> Recommendations:
    """Derive clothing, activity and health advice from current conditions.

    ``weather`` may be a provider payload or an already-parsed
    ``CurrentConditions``.
    """
    conditions = to_metric(_conditions(weather), units)
    return Recommendations(
        clothing=first_match(CLOTHING_RULES, conditions),
        activity=first_match(ACTIVITY_RULES, conditions),
        health=first_match(HEALTH_RULES, conditions),
    )


def needs_umbrella(weather: CurrentConditions | dict[str, Any]) -> str:
    """Answer 'do I need an umbrella?' with 'yes', 'maybe' or 'no'."""
    condition = _conditions(weather).condition
    if "rain" in condition or "drizzle" in condition:
        return "yes"
    if "cloud" in condition:
        return "maybe"
    return "no"


def spoken_summary(weather: CurrentConditions | dict[str, Any]) -> str:
    """One-sentence summary suitable for speech output."""
    conditions = _conditions(weather)
    return (
        f"Weather in {conditions.name}: {round(conditions.temp)} degrees, "
        f"{conditions.condition_description}"
    )
