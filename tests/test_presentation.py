from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from conftest import make_snapshot
from weather_screen.presentation import (
    build_screen_context,
    build_weather_grid,
    format_clock,
    format_date,
    recent_chip_label,
    state_payload,
)
from weather_screen.state import AppState


def _values(snapshot):
    return {item["label"]: item["value"] for item in build_weather_grid(snapshot)}


def test_grid_has_eight_fields_in_order():
    grid = build_weather_grid(make_snapshot("Paris, France"))

    assert [item["label"] for item in grid] == [
        "Temperature",
        "Condition",
        "Wind",
        "UV Index",
        "Humidity",
        "Dew Point",
        "Pressure",
        "Visibility",
    ]


def test_grid_values_pass_through_provider_units():
    values = _values(make_snapshot("Paris, France"))

    assert values["Temperature"] == "18.4°C"
    assert values["Condition"] == "Partly cloudy"
    assert values["Wind"] == "11.2 km/h"
    assert values["UV Index"] == "3.1"
    assert values["Humidity"] == "62%"
    assert values["Dew Point"] == "11°C"


def test_visibility_is_shown_in_kilometres():
    assert _values(make_snapshot("x", visibility=24140))["Visibility"] == "24.14 km"
    assert _values(make_snapshot("x", visibility=10000))["Visibility"] == "10 km"


def test_grid_keeps_full_precision_and_plain_notation():
    values = _values(make_snapshot("x", temperature=18.456, wind_speed=1234567.891, visibility=12345))

    assert values["Temperature"] == "18.456°C"
    assert values["Wind"] == "1234567.891 km/h"
    assert values["Visibility"] == "12.345 km"
    assert _values(make_snapshot("x", wind_speed=2500000.0))["Wind"] == "2500000 km/h"


def test_pressure_is_rounded_half_up():
    assert _values(make_snapshot("x", surface_pressure=1013.6))["Pressure"] == "1014 hPa"
    assert _values(make_snapshot("x", surface_pressure=1012.5))["Pressure"] == "1013 hPa"
    assert _values(make_snapshot("x", surface_pressure=1012.4))["Pressure"] == "1012 hPa"


def test_clock_and_date_formatting():
    instant = datetime(2026, 10, 18, 13, 5, tzinfo=timezone.utc)
    berlin = ZoneInfo("Europe/Berlin")

    assert format_clock(instant, berlin) == "03:05 PM"
    assert format_date(instant, berlin) == "Sunday, October 18"


def test_recent_chip_shows_city_part():
    assert recent_chip_label("Paris, France") == "Paris"
    assert recent_chip_label("Reykjavik") == "Reykjavik"


def test_screen_context_spinner_only_before_first_snapshot():
    utc = ZoneInfo("UTC")
    loading = build_screen_context(AppState(loading=True), utc)
    assert loading["show_spinner"] is True
    assert loading["weather_items"] == []

    refreshing = build_screen_context(AppState(loading=True, weather=make_snapshot("Paris, France")), utc)
    assert refreshing["show_spinner"] is False
    assert len(refreshing["weather_items"]) == 8


def test_screen_context_recent_chips():
    context = build_screen_context(
        AppState(recent_searches=("Paris, France", "Berlin, Germany")),
        ZoneInfo("UTC"),
    )

    assert context["recent_chips"] == [
        {"index": 0, "label": "Paris, France", "short_label": "Paris"},
        {"index": 1, "label": "Berlin, Germany", "short_label": "Berlin"},
    ]


def test_state_payload_includes_condition():
    payload = state_payload(AppState(weather=make_snapshot("Paris, France")))

    assert payload["weather"]["condition"] == "Partly cloudy"
    assert payload["phase"] == "idle"
    assert payload["location_label"] == "My Location"
