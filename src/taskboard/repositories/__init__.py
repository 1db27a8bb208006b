"""Repository layer for data access."""

from .http import HttpTaskRepository
from .protocol import RepositoryError, RepositoryProtocol

__all__ = [
    "HttpTaskRepository",
    "RepositoryError",
    "RepositoryProtocol",
]
