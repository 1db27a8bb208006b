"""Service layer for business logic."""

from .board_service import BoardError, BoardService, BoardValidationError
from .config_service import ConfigService

__all__ = [
    "BoardError",
    "BoardService",
    "BoardValidationError",
    "ConfigService",
]
