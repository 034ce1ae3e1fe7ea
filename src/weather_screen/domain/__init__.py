from .conditions import UNKNOWN_CONDITION, WEATHER_CODE_LABELS, condition_label
from .models import (
    CURRENT_LOCATION_LABEL,
    CurrentDeviceQuery,
    DevicePosition,
    LocationQuery,
    PlaceResult,
    ReverseLookup,
    TextSearchQuery,
    WeatherSnapshot,
)

__all__ = [
    "CURRENT_LOCATION_LABEL",
    "UNKNOWN_CONDITION",
    "WEATHER_CODE_LABELS",
    "CurrentDeviceQuery",
    "DevicePosition",
    "LocationQuery",
    "PlaceResult",
    "ReverseLookup",
    "TextSearchQuery",
    "WeatherSnapshot",
    "condition_label",
]
