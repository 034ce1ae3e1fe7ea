from __future__ import annotations

import math
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from .domain.models import WeatherSnapshot
from .state import AppState


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_clock(instant: datetime, tz: ZoneInfo) -> str:
    return instant.astimezone(tz).strftime("%I:%M %p")


def format_date(instant: datetime, tz: ZoneInfo) -> str:
    local = instant.astimezone(tz)
    return f"{local:%A, %B} {local.day}"


def recent_chip_label(label: str) -> str:
    return label.split(",")[0]


def build_weather_grid(snapshot: WeatherSnapshot) -> list[dict[str, str]]:
    """Eight labeled cells, in display order. Visibility is shown in km."""
    return [
        {"icon": "temperature-high", "label": "Temperature", "value": f"{_format_number(snapshot.temperature)}°C"},
        {"icon": "cloud", "label": "Condition", "value": snapshot.condition},
        {"icon": "wind", "label": "Wind", "value": f"{_format_number(snapshot.wind_speed)} km/h"},
        {"icon": "sun", "label": "UV Index", "value": _format_number(snapshot.uv_index)},
        {"icon": "tint", "label": "Humidity", "value": f"{_format_number(snapshot.relative_humidity)}%"},
        {"icon": "thermometer-half", "label": "Dew Point", "value": f"{_format_number(snapshot.dew_point)}°C"},
        {"icon": "tachometer-alt", "label": "Pressure", "value": f"{_round_half_up(snapshot.surface_pressure)} hPa"},
        {"icon": "eye", "label": "Visibility", "value": f"{_format_number(snapshot.visibility / 1000)} km"},
    ]


def build_screen_context(state: AppState, tz: ZoneInfo) -> dict[str, Any]:
    context: dict[str, Any] = {
        "clock_display": format_clock(state.clock, tz),
        "date_display": format_date(state.clock, tz),
        "location_label": state.location_label,
        "loading": state.loading,
        "search_text": state.search_text,
        "alert": state.alert,
        "phase": state.phase.value,
        "recent_chips": [
            {"index": index, "label": label, "short_label": recent_chip_label(label)}
            for index, label in enumerate(state.recent_searches)
        ],
        "weather_available": state.weather is not None,
        "weather_items": [],
        "show_spinner": state.loading and state.weather is None,
    }
    if state.weather is not None:
        context["weather_items"] = build_weather_grid(state.weather)
    return context


def state_payload(state: AppState) -> dict[str, Any]:
    payload = state.model_dump(mode="json")
    if state.weather is not None:
        payload["weather"]["condition"] = state.weather.condition
    return payload
