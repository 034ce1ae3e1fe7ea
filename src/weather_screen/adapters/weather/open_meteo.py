from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ...domain.models import WeatherSnapshot
from ..errors import ProviderError
from ..http import fetch_json

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
WEATHER_UNAVAILABLE_MESSAGE = "Weather data unavailable"

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "surface_pressure",
    "wind_speed_10m",
    "uv_index",
    "visibility",
    "dew_point_2m",
)

# provider field -> WeatherSnapshot field
NUMERIC_FIELDS = {
    "temperature_2m": "temperature",
    "relative_humidity_2m": "relative_humidity",
    "apparent_temperature": "apparent_temperature",
    "precipitation": "precipitation",
    "surface_pressure": "surface_pressure",
    "wind_speed_10m": "wind_speed",
    "uv_index": "uv_index",
    "visibility": "visibility",
    "dew_point_2m": "dew_point",
}


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ProviderError(WEATHER_UNAVAILABLE_MESSAGE)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ProviderError(WEATHER_UNAVAILABLE_MESSAGE) from exc


def _coerce_optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class OpenMeteoWeatherAdapter:
    def __init__(
        self,
        *,
        forecast_url: str = OPEN_METEO_FORECAST_URL,
        timeout_seconds: float | None = None,
    ) -> None:
        self._forecast_url = forecast_url
        self._timeout_seconds = timeout_seconds

    def fetch_weather(self, lat: float, lon: float, *, label: str) -> WeatherSnapshot:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(CURRENT_FIELDS),
        }
        payload = fetch_json(
            self._forecast_url,
            params,
            provider_message=WEATHER_UNAVAILABLE_MESSAGE,
            timeout=self._timeout_seconds,
        )
        current = payload.get("current") if isinstance(payload, dict) else None
        if not isinstance(current, dict):
            raise ProviderError(WEATHER_UNAVAILABLE_MESSAGE)

        values: dict[str, Any] = {
            snapshot_field: _coerce_float(current.get(provider_field))
            for provider_field, snapshot_field in NUMERIC_FIELDS.items()
        }
        return WeatherSnapshot(
            **values,
            weather_code=_coerce_optional_int(current.get("weather_code")),
            location_label=label,
            fetched_at=datetime.now(timezone.utc),
        )
