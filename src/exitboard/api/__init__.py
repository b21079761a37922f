"""Clients for the HTTP APIs the board talks to."""

from .client import (
    ApiAuthError,
    ApiClient,
    ApiConnectionError,
    ApiError,
    ApiNotFoundError,
    ApiResponseError,
    ApiServerError,
)
from .intelligence import IntelligenceClient
from .notifications import NotificationPreferencesClient

__all__ = [
    "ApiAuthError",
    "ApiClient",
    "ApiConnectionError",
    "ApiError",
    "ApiNotFoundError",
    "ApiResponseError",
    "ApiServerError",
    "IntelligenceClient",
    "NotificationPreferencesClient",
]
