from __future__ import annotations

from typing import Protocol

from ...domain.models import PlaceResult


class ForwardGeocoder(Protocol):
    def forward_geocode(self, query: str) -> PlaceResult:
        """Resolve free text to the best-matching place."""
