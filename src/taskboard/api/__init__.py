"""Remote task API integration."""

from .client import (
    TaskApiClient,
    TaskApiError,
    TaskApiNotFoundError,
    TaskApiRejectedError,
)

__all__ = [
    "TaskApiClient",
    "TaskApiError",
    "TaskApiNotFoundError",
    "TaskApiRejectedError",
]
