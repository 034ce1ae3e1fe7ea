from .errors import AdapterError, NetworkError, NotFoundError, PermissionDeniedError, ProviderError

__all__ = [
    "AdapterError",
    "NetworkError",
    "NotFoundError",
    "PermissionDeniedError",
    "ProviderError",
]
