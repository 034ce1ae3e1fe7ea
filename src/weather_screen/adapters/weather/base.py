from __future__ import annotations

from typing import Protocol

from ...domain.models import WeatherSnapshot


class WeatherAdapter(Protocol):
    def fetch_weather(self, lat: float, lon: float, *, label: str) -> WeatherSnapshot:
        """Fetch current conditions for the coordinates, tagged with the display label."""
