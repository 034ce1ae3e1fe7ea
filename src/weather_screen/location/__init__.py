from .service import build_device_service, reverse_geocode

__all__ = ["build_device_service", "reverse_geocode"]
