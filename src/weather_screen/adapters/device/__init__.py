from .base import DeviceLocationService
from .ip import IpDeviceLocationService
from .static import DisabledDeviceLocationService, FixedDeviceLocationService

__all__ = [
    "DeviceLocationService",
    "DisabledDeviceLocationService",
    "FixedDeviceLocationService",
    "IpDeviceLocationService",
]
