from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from weather_screen.adapters.errors import NotFoundError
from weather_screen.controller import WeatherController
from weather_screen.domain.models import DevicePosition, PlaceResult, ReverseLookup, WeatherSnapshot
from weather_screen.settings import AppSettings, EnvSettings, WeatherScreenYamlSettings
from weather_screen.state import StateStore
from weather_screen.storage.recent import RecentSearchStore


def make_snapshot(label: str, **overrides) -> WeatherSnapshot:
    values = {
        "temperature": 18.4,
        "relative_humidity": 62,
        "apparent_temperature": 17.9,
        "precipitation": 0.0,
        "weather_code": 2,
        "surface_pressure": 1013.6,
        "wind_speed": 11.2,
        "uv_index": 3.1,
        "visibility": 24140,
        "dew_point": 11.0,
        "location_label": label,
        "fetched_at": datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return WeatherSnapshot(**values)


class FakeWeatherAdapter:
    def __init__(self, *, error: Exception | None = None, gates: dict[str, threading.Event] | None = None):
        self.error = error
        self.gates = gates or {}
        self.calls: list[tuple[float, float, str]] = []

    def fetch_weather(self, lat: float, lon: float, *, label: str) -> WeatherSnapshot:
        self.calls.append((lat, lon, label))
        gate = self.gates.get(label)
        if gate is not None:
            gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return make_snapshot(label)


class FakeGeocoder:
    def __init__(self, places: dict[str, PlaceResult] | None = None, *, error: Exception | None = None):
        self.places = places or {}
        self.error = error
        self.calls: list[str] = []

    def forward_geocode(self, query: str) -> PlaceResult:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        try:
            return self.places[query]
        except KeyError as exc:
            raise NotFoundError(f"Location not found: {query}") from exc


class FakeDeviceService:
    def __init__(
        self,
        *,
        granted: bool = True,
        position: DevicePosition | None = None,
        lookup: ReverseLookup | None = None,
        position_error: Exception | None = None,
        position_gate: threading.Event | None = None,
    ):
        self.granted = granted
        self.position = position or DevicePosition(latitude=52.52, longitude=13.41)
        self.lookup = lookup or ReverseLookup(city="Berlin", region="Berlin")
        self.position_error = position_error
        self.position_gate = position_gate
        self.permission_requests = 0
        self.position_requests = 0

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    def current_position(self) -> DevicePosition:
        self.position_requests += 1
        if self.position_gate is not None:
            self.position_gate.wait(timeout=5)
        if self.position_error is not None:
            raise self.position_error
        return self.position

    def reverse_lookup(self, lat: float, lon: float) -> ReverseLookup:
        return self.lookup


PARIS = PlaceResult(latitude=48.85, longitude=2.35, display_name="Paris, France")
BERLIN = PlaceResult(latitude=52.52, longitude=13.41, display_name="Berlin, Germany")


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "weather_screen.db"


@pytest.fixture
def weather_adapter() -> FakeWeatherAdapter:
    return FakeWeatherAdapter()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder({"Paris": PARIS, "Paris, France": PARIS, "Berlin": BERLIN})


@pytest.fixture
def device_service() -> FakeDeviceService:
    return FakeDeviceService()


@pytest.fixture
def recent_store(db_path: Path) -> RecentSearchStore:
    return RecentSearchStore(db_path)


@pytest.fixture
def controller(weather_adapter, geocoder, device_service, recent_store) -> WeatherController:
    return WeatherController(
        store=StateStore(),
        weather_adapter=weather_adapter,
        geocoder=geocoder,
        device_service=device_service,
        recent_store=recent_store,
    )


@pytest.fixture
def make_settings(tmp_path: Path):
    def _make(**yaml_values) -> AppSettings:
        return AppSettings(
            env=EnvSettings(_env_file=None),
            yaml=WeatherScreenYamlSettings.model_validate(yaml_values),
            project_root=tmp_path,
            config_path=tmp_path / "weather_screen.yaml",
            db_path=tmp_path / "weather_screen.db",
            timezone=ZoneInfo("UTC"),
        )

    return _make
