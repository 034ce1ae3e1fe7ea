from __future__ import annotations

from ...domain.models import DevicePosition, ReverseLookup
from ..errors import PermissionDeniedError


class FixedDeviceLocationService:
    """Reports a configured position, for installs whose location never changes."""

    def __init__(
        self,
        *,
        latitude: float,
        longitude: float,
        city: str | None = None,
        region: str | None = None,
    ) -> None:
        self._position = DevicePosition(latitude=latitude, longitude=longitude)
        self._lookup = ReverseLookup(city=city, region=region)

    def request_permission(self) -> bool:
        return True

    def current_position(self) -> DevicePosition:
        return self._position

    def reverse_lookup(self, lat: float, lon: float) -> ReverseLookup:
        return self._lookup


class DisabledDeviceLocationService:
    """Always refuses location access."""

    def request_permission(self) -> bool:
        return False

    def current_position(self) -> DevicePosition:
        raise PermissionDeniedError("Location permission denied")

    def reverse_lookup(self, lat: float, lon: float) -> ReverseLookup:
        return ReverseLookup()
