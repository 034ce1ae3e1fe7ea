from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from .adapters.device import DeviceLocationService
from .adapters.errors import AdapterError
from .adapters.geocoding import ForwardGeocoder, OpenMeteoGeocoder
from .adapters.weather import OpenMeteoWeatherAdapter, WeatherAdapter
from .domain.models import CurrentDeviceQuery, LocationQuery, PlaceResult, TextSearchQuery
from .location.service import build_device_service, reverse_geocode
from .settings import AppSettings
from .state import AppState, FlowKind, FlowPhase, StateStore
from .storage.recent import RecentSearchStore

LOGGER = logging.getLogger(__name__)

CITY_NOT_FOUND_MESSAGE = "City not found"
POSITION_UNAVAILABLE_MESSAGE = "Unable to determine location"
UNEXPECTED_ERROR_MESSAGE = "Something went wrong"


class WeatherController:
    """Owns the application state and runs the two resolver flows.

    Flows are not serialized against each other. When two overlap, whichever
    finishes last leaves its result on screen.
    """

    def __init__(
        self,
        *,
        store: StateStore,
        weather_adapter: WeatherAdapter,
        geocoder: ForwardGeocoder,
        device_service: DeviceLocationService,
        recent_store: RecentSearchStore,
    ) -> None:
        self._store = store
        self._weather = weather_adapter
        self._geocoder = geocoder
        self._device = device_service
        self._recent = recent_store

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def state(self) -> AppState:
        return self._store.snapshot()

    def load_recent_searches(self) -> AppState:
        entries = self._recent.load()
        return self._store.update(recent_searches=tuple(entries))

    def set_search_text(self, text: str) -> AppState:
        return self._store.update(search_text=text)

    def dismiss_alert(self) -> AppState:
        return self._store.update(alert=None)

    def tick_clock(self, now: datetime | None = None) -> AppState:
        return self._store.update(clock=now or datetime.now(timezone.utc))

    async def resolve(self, query: LocationQuery) -> AppState:
        if isinstance(query, CurrentDeviceQuery):
            return await self.resolve_current_location()
        if isinstance(query, TextSearchQuery):
            return await self.search(query.raw)
        raise ValueError(f"Unsupported location query: {query!r}")

    async def resolve_current_location(self) -> AppState:
        self._store.update(
            loading=True,
            flow=FlowKind.CURRENT_DEVICE,
            phase=FlowPhase.REQUESTING_PERMISSION,
            alert=None,
        )
        try:
            return await self._resolve_current_location()
        except Exception:
            LOGGER.exception("Current location flow failed")
            return self._fail(UNEXPECTED_ERROR_MESSAGE)

    async def search(self, query: str | None = None) -> AppState:
        text = query or self.state.search_text
        if not text.strip():
            return self.state

        self._store.update(
            loading=True,
            flow=FlowKind.TEXT_SEARCH,
            phase=FlowPhase.GEOCODING,
            alert=None,
        )
        try:
            return await self._search(text.strip())
        except Exception:
            LOGGER.exception("Search flow failed for %r", text)
            return self._fail(UNEXPECTED_ERROR_MESSAGE)

    async def search_recent(self, index: int) -> AppState:
        entries = self.state.recent_searches
        if index < 0 or index >= len(entries):
            raise IndexError(f"No recent search at position {index}")
        return await self.search(entries[index])

    async def _resolve_current_location(self) -> AppState:
        try:
            granted = await asyncio.to_thread(self._device.request_permission)
        except AdapterError as exc:
            LOGGER.warning("Location permission request failed: %s", exc)
            granted = False

        if not granted:
            LOGGER.info("Location permission denied")
            return self._store.update(phase=FlowPhase.DENIED, loading=False)

        self._store.update(phase=FlowPhase.AWAITING_FIX)
        try:
            position = await asyncio.to_thread(self._device.current_position)
        except AdapterError as exc:
            LOGGER.warning("Position fix failed: %s", exc)
            return self._fail(POSITION_UNAVAILABLE_MESSAGE)

        self._store.update(phase=FlowPhase.REVERSE_GEOCODING)
        place = await asyncio.to_thread(
            reverse_geocode,
            self._device,
            position.latitude,
            position.longitude,
        )
        return await self._fetch_weather(place, remember=False)

    async def _search(self, text: str) -> AppState:
        try:
            place = await asyncio.to_thread(self._geocoder.forward_geocode, text)
        except AdapterError as exc:
            LOGGER.warning("Geocoding %r failed: %s", text, exc)
            return self._fail(CITY_NOT_FOUND_MESSAGE)
        return await self._fetch_weather(place, remember=True)

    async def _fetch_weather(self, place: PlaceResult, *, remember: bool) -> AppState:
        self._store.update(phase=FlowPhase.FETCHING_WEATHER)
        try:
            snapshot = await asyncio.to_thread(
                self._weather.fetch_weather,
                place.latitude,
                place.longitude,
                label=place.display_name,
            )
        except AdapterError as exc:
            LOGGER.warning("Weather fetch for '%s' failed: %s", place.display_name, exc)
            return self._fail(str(exc))

        changes: dict[str, object] = {
            "weather": snapshot,
            "location_label": place.display_name,
            "phase": FlowPhase.READY,
            "loading": False,
        }
        if remember:
            entries = await asyncio.to_thread(self._recent.push, place.display_name)
            changes["recent_searches"] = tuple(entries)
            changes["search_text"] = ""

        LOGGER.info(
            "Weather updated for '%s' (%.3f, %.3f)",
            place.display_name,
            place.latitude,
            place.longitude,
        )
        return self._store.update(**changes)

    def _fail(self, message: str) -> AppState:
        return self._store.update(phase=FlowPhase.FAILED, loading=False, alert=message)


def _build_weather_adapter(settings: AppSettings) -> OpenMeteoWeatherAdapter:
    provider = settings.yaml.weather.provider
    if provider != "open_meteo":
        raise ValueError(f"Unsupported weather provider: {provider}")
    return OpenMeteoWeatherAdapter(
        forecast_url=settings.yaml.weather.forecast_url,
        timeout_seconds=settings.yaml.weather.request_timeout_seconds,
    )


def build_controller(settings: AppSettings) -> WeatherController:
    return WeatherController(
        store=StateStore(),
        weather_adapter=_build_weather_adapter(settings),
        geocoder=OpenMeteoGeocoder(
            search_url=settings.yaml.weather.geocoding_url,
            timeout_seconds=settings.yaml.weather.request_timeout_seconds,
        ),
        device_service=build_device_service(settings),
        recent_store=RecentSearchStore(settings.db_path, limit=settings.yaml.history.limit),
    )
