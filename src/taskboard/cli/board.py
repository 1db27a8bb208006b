"""Print the board once without starting the TUI."""

import asyncio

from ..api import TaskApiClient
from ..config import Settings
from ..models import Board, BoardConfig
from ..repositories import HttpTaskRepository
from ..services import BoardError, BoardService, ConfigService
from . import output


def run_list(settings: Settings) -> int:
    """Fetch the task collection and print the three columns.

    Args:
        settings: Application settings (API URL, timeout, project root)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config_service = ConfigService(settings.project_root)
    config_service.get_config()
    if config_service.has_config_error:
        output.warning(f"{config_service.config_error} (using defaults)")

    try:
        board = asyncio.run(_load_board(settings))
    except BoardError as e:
        output.error(f"{e} from {settings.api_url}")
        return 1

    print_board(board, config_service.get_board_config())
    output.success(f"{board.task_count} tasks loaded from {settings.api_url}")
    return 0


async def _load_board(settings: Settings) -> Board:
    async with TaskApiClient(settings.api_url, timeout=settings.timeout) as client:
        service = BoardService(HttpTaskRepository(client, wire_format=settings.wire_format))
        await service.refresh()
        return service.board


def print_board(board: Board, config: BoardConfig) -> None:
    """Print each column with its tasks."""
    for stage, title, tasks in board.get_visible_columns(config):
        output.column(stage, title, tasks)
