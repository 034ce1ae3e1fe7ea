from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _validate_http_url(value: str, field_name: str) -> str:
    text = value.strip()
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL")
    return text


class UiSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = "Weather App"
    clock_interval_seconds: int = Field(default=60, ge=1, le=3600)
    footer: str = "Powered by Open-Meteo"


class LocationSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mode: Literal["auto", "fixed", "disabled"] = "auto"
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    city: str | None = None
    region: str | None = None
    ip_geolocation_url: str = "https://ipapi.co/json/"
    reverse_geocoding_url: str = "https://nominatim.openstreetmap.org/reverse"

    @field_validator("city", "region")
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None

    @field_validator("ip_geolocation_url")
    @classmethod
    def validate_ip_url(cls, value: str) -> str:
        return _validate_http_url(value, "location.ip_geolocation_url")

    @field_validator("reverse_geocoding_url")
    @classmethod
    def validate_reverse_url(cls, value: str) -> str:
        return _validate_http_url(value, "location.reverse_geocoding_url")

    @model_validator(mode="after")
    def validate_fixed_coordinates(self) -> LocationSettings:
        if self.mode == "fixed" and (self.latitude is None or self.longitude is None):
            raise ValueError("location.latitude and location.longitude are required when mode is 'fixed'")
        return self


class WeatherSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["open_meteo"] = "open_meteo"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    request_timeout_seconds: float | None = Field(default=None, gt=0)

    @field_validator("forecast_url")
    @classmethod
    def validate_forecast_url(cls, value: str) -> str:
        return _validate_http_url(value, "weather.forecast_url")

    @field_validator("geocoding_url")
    @classmethod
    def validate_geocoding_url(cls, value: str) -> str:
        return _validate_http_url(value, "weather.geocoding_url")


class HistorySettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    limit: int = Field(default=5, ge=1, le=20)


class WeatherScreenYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ui: UiSettings = Field(default_factory=UiSettings)
    location: LocationSettings = Field(default_factory=LocationSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_screen_env: Literal["dev", "test", "prod"] = "dev"
    weather_screen_timezone: str = "Europe/Berlin"
    weather_screen_config_path: Path = Path("config/weather_screen.yaml")
    weather_screen_db_path: Path = Path("data/weather_screen.db")

    @field_validator("weather_screen_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class AppSettings(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    env: EnvSettings
    yaml: WeatherScreenYamlSettings
    project_root: Path
    config_path: Path
    db_path: Path
    timezone: ZoneInfo


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> WeatherScreenYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Weather screen config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Weather screen config must be a YAML mapping/object at the top level")
    return WeatherScreenYamlSettings.model_validate(raw_config)


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    env = EnvSettings()
    config_path = _resolve_project_path(env.weather_screen_config_path)
    db_path = _resolve_project_path(env.weather_screen_db_path)
    yaml_settings = _load_yaml_settings(config_path)
    timezone = ZoneInfo(env.weather_screen_timezone)
    return AppSettings(
        env=env,
        yaml=yaml_settings,
        project_root=PROJECT_ROOT,
        config_path=config_path,
        db_path=db_path,
        timezone=timezone,
    )
