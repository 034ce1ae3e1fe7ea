from .base import ForwardGeocoder
from .open_meteo import OpenMeteoGeocoder

__all__ = ["ForwardGeocoder", "OpenMeteoGeocoder"]
