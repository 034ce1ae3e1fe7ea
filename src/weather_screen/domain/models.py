from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .conditions import condition_label

CURRENT_LOCATION_LABEL = "My Location"


class WeatherSnapshot(BaseModel):
    """One forecast fetch. Replaced wholesale, never merged."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    temperature: float
    relative_humidity: float
    apparent_temperature: float
    precipitation: float
    weather_code: int | None = None
    surface_pressure: float
    wind_speed: float
    uv_index: float
    visibility: float
    dew_point: float
    location_label: str
    fetched_at: datetime

    @property
    def condition(self) -> str:
        return condition_label(self.weather_code)


class PlaceResult(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    latitude: float
    longitude: float
    display_name: str

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("place display_name must not be empty")
        return text


class DevicePosition(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ReverseLookup(BaseModel):
    """Locality names reported by the device location service."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    city: str | None = None
    region: str | None = None


class CurrentDeviceQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["current_device"] = "current_device"


class TextSearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text_search"] = "text_search"
    raw: str


LocationQuery = Annotated[Union[CurrentDeviceQuery, TextSearchQuery], Field(discriminator="kind")]
