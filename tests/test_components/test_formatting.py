"""Tests for dashboard text helpers."""

from datetime import timedelta

import pytest

from weathersphere.components.places_panel import escape_markup
from weathersphere.components.status_bar import format_countdown, format_since
from weathersphere.components.weather_panel import temp_color


class TestStatusText:
    """Tests for refresh timing text."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "Updated just now"),
            (59, "Updated just now"),
            (60, "Updated 1 min ago"),
            (150, "Updated 2 mins ago"),
        ],
    )
    def test_format_since(self, seconds, expected):
        assert format_since(timedelta(seconds=seconds)) == expected

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "Refreshing..."), (-3, "Refreshing..."), (42, "Next: 42s"), (605, "Next: 10m 05s")],
    )
    def test_format_countdown(self, seconds, expected):
        assert format_countdown(timedelta(seconds=seconds)) == expected


class TestTempColor:
    def test_metric(self):
        assert temp_color(-3) == "blue"
        assert temp_color(15) == "green"
        assert temp_color(35) == "red"

    def test_imperial(self):
        assert temp_color(32, "imperial") == "blue"
        assert temp_color(77, "imperial") == "yellow"


def test_escape_markup():
    assert escape_markup("[bold]Rome[/bold]") == r"\[bold\]Rome\[/bold\]"
