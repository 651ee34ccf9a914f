"""Backend clients for goalpath."""

from .base import AuthChangeCallback, BackendClient, BackendError, BaseBackendClient, Subscription

__all__ = [
    "AuthChangeCallback",
    "BackendClient",
    "BackendError",
    "BaseBackendClient",
    "Subscription",
]
