from __future__ import annotations


class AdapterError(RuntimeError):
    """Base class for failures raised by external collaborators."""


class ProviderError(AdapterError):
    """Raised when a provider answers with a non-success status or an unusable payload."""


class NetworkError(AdapterError):
    """Raised when a request fails at the transport level."""


class NotFoundError(AdapterError):
    """Raised when a geocoding query has no matching place."""


class PermissionDeniedError(AdapterError):
    """Raised when the device location service refuses access."""
