from __future__ import annotations

import logging

from ..adapters.device import (
    DeviceLocationService,
    DisabledDeviceLocationService,
    FixedDeviceLocationService,
    IpDeviceLocationService,
)
from ..adapters.errors import AdapterError
from ..domain.models import CURRENT_LOCATION_LABEL, PlaceResult, ReverseLookup
from ..settings import AppSettings

LOGGER = logging.getLogger(__name__)


def _normalize_label(city: str | None, region: str | None, *, fallback: str) -> str:
    city_text = (city or "").strip()
    if city_text:
        return city_text
    region_text = (region or "").strip()
    if region_text:
        return region_text
    return fallback


def reverse_geocode(service: DeviceLocationService, lat: float, lon: float) -> PlaceResult:
    """Name the coordinates: city, else region, else ``"My Location"``.

    Never raises; a failing lookup degrades to the generic label so the weather
    can still be shown.
    """
    try:
        lookup = service.reverse_lookup(lat, lon)
    except AdapterError as exc:
        LOGGER.warning("Reverse lookup for %.3f, %.3f failed: %s", lat, lon, exc)
        lookup = ReverseLookup()

    label = _normalize_label(lookup.city, lookup.region, fallback=CURRENT_LOCATION_LABEL)
    return PlaceResult(latitude=lat, longitude=lon, display_name=label)


def build_device_service(settings: AppSettings) -> DeviceLocationService:
    location = settings.yaml.location
    if location.mode == "auto":
        return IpDeviceLocationService(
            geolocation_url=location.ip_geolocation_url,
            reverse_url=location.reverse_geocoding_url,
            timeout_seconds=settings.yaml.weather.request_timeout_seconds,
        )
    if location.mode == "fixed":
        if location.latitude is None or location.longitude is None:
            raise ValueError("fixed location mode needs latitude and longitude")
        return FixedDeviceLocationService(
            latitude=location.latitude,
            longitude=location.longitude,
            city=location.city,
            region=location.region,
        )
    if location.mode == "disabled":
        return DisabledDeviceLocationService()
    raise ValueError(f"Unsupported location mode: {location.mode}")
