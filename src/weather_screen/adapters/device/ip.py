from __future__ import annotations

from typing import Any

from ...domain.models import DevicePosition, ReverseLookup
from ..errors import ProviderError
from ..http import fetch_json

IP_GEOLOCATION_URL = "https://ipapi.co/json/"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
POSITION_UNAVAILABLE_MESSAGE = "Unable to determine location"
REVERSE_UNAVAILABLE_MESSAGE = "Reverse geocoding unavailable"

# Nominatim reports the locality under the most specific of these keys.
LOCALITY_KEYS = ("city", "town", "village", "municipality")


def _coerce_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _first_text(mapping: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class IpDeviceLocationService:
    """Locates the host running the service by its public IP address."""

    def __init__(
        self,
        *,
        geolocation_url: str = IP_GEOLOCATION_URL,
        reverse_url: str = NOMINATIM_REVERSE_URL,
        timeout_seconds: float | None = None,
    ) -> None:
        self._geolocation_url = geolocation_url
        self._reverse_url = reverse_url
        self._timeout_seconds = timeout_seconds

    def request_permission(self) -> bool:
        return True

    def current_position(self) -> DevicePosition:
        payload = fetch_json(
            self._geolocation_url,
            {},
            provider_message=POSITION_UNAVAILABLE_MESSAGE,
            timeout=self._timeout_seconds,
        )
        if not isinstance(payload, dict):
            raise ProviderError(POSITION_UNAVAILABLE_MESSAGE)

        lat = _coerce_float(payload.get("latitude"))
        lon = _coerce_float(payload.get("longitude"))
        if lat is None or lon is None:
            raise ProviderError(POSITION_UNAVAILABLE_MESSAGE)
        return DevicePosition(latitude=lat, longitude=lon)

    def reverse_lookup(self, lat: float, lon: float) -> ReverseLookup:
        payload = fetch_json(
            self._reverse_url,
            {"lat": lat, "lon": lon, "format": "jsonv2", "addressdetails": 1},
            provider_message=REVERSE_UNAVAILABLE_MESSAGE,
            timeout=self._timeout_seconds,
        )
        if not isinstance(payload, dict):
            return ReverseLookup()
        address = payload.get("address")
        if not isinstance(address, dict):
            return ReverseLookup()
        return ReverseLookup(
            city=_first_text(address, LOCALITY_KEYS),
            region=_first_text(address, ("state",)),
        )
