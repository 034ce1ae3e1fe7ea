from __future__ import annotations

from typing import Any

from ...domain.models import PlaceResult
from ..errors import NotFoundError, ProviderError
from ..http import fetch_json

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
GEOCODING_UNAVAILABLE_MESSAGE = "Geocoding data unavailable"


def _coerce_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _display_name(name: Any, country: Any) -> str | None:
    name_text = name.strip() if isinstance(name, str) else ""
    country_text = country.strip() if isinstance(country, str) else ""
    if name_text and country_text:
        return f"{name_text}, {country_text}"
    return name_text or None


class OpenMeteoGeocoder:
    def __init__(
        self,
        *,
        search_url: str = OPEN_METEO_GEOCODING_URL,
        timeout_seconds: float | None = None,
    ) -> None:
        self._search_url = search_url
        self._timeout_seconds = timeout_seconds

    def forward_geocode(self, query: str) -> PlaceResult:
        text = query.strip()
        if not text:
            raise NotFoundError("Empty location query")

        payload = fetch_json(
            self._search_url,
            {"name": text, "count": 1},
            provider_message=GEOCODING_UNAVAILABLE_MESSAGE,
            timeout=self._timeout_seconds,
        )
        if not isinstance(payload, dict):
            raise ProviderError(GEOCODING_UNAVAILABLE_MESSAGE)

        results = payload.get("results")
        if not isinstance(results, list) or not results:
            raise NotFoundError(f"Location not found: {text}")

        result = results[0]
        if not isinstance(result, dict):
            raise NotFoundError(f"Location not found: {text}")

        lat = _coerce_float(result.get("latitude"))
        lon = _coerce_float(result.get("longitude"))
        label = _display_name(result.get("name"), result.get("country"))
        if lat is None or lon is None or label is None:
            raise NotFoundError(f"Location not found: {text}")

        return PlaceResult(latitude=lat, longitude=lon, display_name=label)
