from .base import WeatherAdapter
from .open_meteo import CURRENT_FIELDS, WEATHER_UNAVAILABLE_MESSAGE, OpenMeteoWeatherAdapter

__all__ = [
    "CURRENT_FIELDS",
    "WEATHER_UNAVAILABLE_MESSAGE",
    "OpenMeteoWeatherAdapter",
    "WeatherAdapter",
]
