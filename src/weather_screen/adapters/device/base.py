from __future__ import annotations

from typing import Protocol

from ...domain.models import DevicePosition, ReverseLookup


class DeviceLocationService(Protocol):
    def request_permission(self) -> bool:
        """Return True when location access is granted."""

    def current_position(self) -> DevicePosition:
        """Return a one-shot position fix."""

    def reverse_lookup(self, lat: float, lon: float) -> ReverseLookup:
        """Return locality names for the coordinates; empty fields when unknown."""
