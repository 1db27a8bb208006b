"""taskboard TUI Application."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from textual.app import App
from textual.binding import Binding

from .api import TaskApiClient
from .config import Settings
from .models import Direction, Stage, Task, TaskDraft, TaskId, transition
from .repositories import HttpTaskRepository
from .services import BoardError, BoardService, ConfigService
from .ui.screens.board import BoardScreen
from .ui.widgets import ConfirmModal, TaskFormModal


class TaskboardApp(App):
    """taskboard - Terminal Kanban for a remote task collection."""

    TITLE = "taskboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("H", "move_task_backward", "Move ←", show=True),
        Binding("L", "move_task_forward", "Move →", show=True),
        Binding("shift+left", "move_task_backward", "Move ←", show=False),
        Binding("shift+right", "move_task_forward", "Move →", show=False),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize API client, repository and services."""
        self.config_service = ConfigService(self.settings.project_root)
        self.client = TaskApiClient(self.settings.api_url, timeout=self.settings.timeout)
        self.repository = HttpTaskRepository(self.client, wire_format=self.settings.wire_format)
        self.board_service = BoardService(
            self.repository,
            serialize_mutations=self.settings.serialize_mutations,
        )

    def on_mount(self) -> None:
        """Show the board and load it."""
        self.sub_title = self.settings.api_url
        self.config_service.get_config()
        if self.config_service.has_config_error:
            self.notify(f"{self.config_service.config_error} (using defaults)", severity="warning")
        self.push_screen("board")
        self.action_refresh()

    async def on_unmount(self) -> None:
        await self.client.aclose()

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    def _refuse_if_busy(self) -> bool:
        """Refuse a new change while one is in flight."""
        if self.board_service.busy:
            self.notify("Still working on the previous change", severity="warning", timeout=2)
            return True
        return False

    async def run_board_action(
        self,
        action: Awaitable[Any],
        success_message: str | None = None,
        focus_task_id: TaskId | None = None,
        on_failure: Callable[[BoardError], None] | None = None,
    ) -> bool:
        """
        Await a board operation and re-render the board.

        Errors are shown as a notification and in the status bar; the board
        keeps showing the last loaded tasks. on_failure is then called with
        the error.

        Returns:
            True if the operation succeeded
        """
        screen = self._board_screen()
        if screen:
            screen.set_status(busy=True)
        try:
            await action
        except BoardError as e:
            self.notify(str(e), severity="error")
            if on_failure is not None:
                on_failure(e)
            return False
        finally:
            if screen:
                screen.set_status(self.board_service.busy, self.board_service.error)

        if screen:
            screen.show_board(self.board_service.board, focus_task_id=focus_task_id)
        if success_message:
            self.notify(success_message, timeout=2)
        return True

    def _start(self, action: Awaitable[Any], **kwargs: Any) -> None:
        """Run a board action in a worker so the UI stays responsive."""
        self.run_worker(self.run_board_action(action, **kwargs), group="board")

    def action_refresh(self) -> None:
        """Reload the board from the server."""
        self._start(self.board_service.refresh())

    # Navigation actions
    def action_nav_left(self) -> None:
        """Navigate to previous column."""
        screen = self._board_screen()
        if screen:
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        """Navigate to next column."""
        screen = self._board_screen()
        if screen:
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        """Navigate to previous task."""
        screen = self._board_screen()
        if screen:
            screen.navigate_task(-1)

    def action_nav_down(self) -> None:
        """Navigate to next task."""
        screen = self._board_screen()
        if screen:
            screen.navigate_task(1)

    # Task actions
    def action_new_task(self) -> None:
        """Open the form for a new task in the focused column's stage."""
        screen = self._board_screen()
        if screen is None or self._refuse_if_busy():
            return
        self._open_task_form(default_stage=screen.current_stage)

    def action_edit_task(self) -> None:
        """Open the form for the focused task."""
        task = self._current_task()
        if task is None or self._refuse_if_busy():
            return
        self._open_task_form(task)

    def _open_task_form(
        self,
        task: Task | None = None,
        default_stage: Stage = Stage.TODO,
        draft: TaskDraft | None = None,
        error: str | None = None,
    ) -> None:
        """Show the create form, or the edit form when a task is given."""
        if task is None:
            callback = self._handle_new_task_form
        else:
            task_id = task.id

            def callback(submitted: TaskDraft | None) -> None:
                self._handle_edit_task_form(task_id, submitted)

        self.push_screen(
            TaskFormModal(
                task,
                default_stage=default_stage,
                board_config=self.config_service.get_board_config(),
                draft=draft,
                error=error,
            ),
            callback=callback,
        )

    def _handle_new_task_form(self, draft: TaskDraft | None) -> None:
        """Create the task entered in the form (None means cancelled)."""
        if draft is None:
            return
        self._start(
            self.board_service.create(draft),
            success_message="Task created",
            on_failure=lambda e: self._open_task_form(
                default_stage=draft.stage, draft=draft, error=str(e)
            ),
        )

    def _handle_edit_task_form(self, task_id: TaskId, draft: TaskDraft | None) -> None:
        """Save the edited fields (None means cancelled)."""
        if draft is None:
            return
        self._start(
            self.board_service.update(task_id, draft),
            success_message="Task updated",
            focus_task_id=task_id,
            on_failure=lambda e: self._reopen_edit_form(task_id, draft, str(e)),
        )

    def _reopen_edit_form(self, task_id: TaskId, draft: TaskDraft, error: str) -> None:
        """Give the entered values back after a failed update."""
        task = self.board_service.get_task(task_id)
        if task is None:
            # Removed remotely; the error notification is all that is left
            return
        self._open_task_form(task, draft=draft, error=error)

    def action_delete_task(self) -> None:
        """Delete the focused task, asking first unless disabled in config."""
        task = self._current_task()
        if task is None or self._refuse_if_busy():
            return

        if not self.config_service.get_board_config().confirm_delete:
            self._handle_delete_confirm(task.id, True)
            return

        self.push_screen(
            ConfirmModal(f"Delete '{task.title}'?"),
            callback=lambda confirmed: self._handle_delete_confirm(task.id, confirmed),
        )

    def _handle_delete_confirm(self, task_id: TaskId, confirmed: bool) -> None:
        """Delete after confirmation; declining is a plain cancellation."""
        if not confirmed:
            return
        self._start(self.board_service.delete(task_id), success_message="Task deleted")

    def action_move_task_backward(self) -> None:
        """Move the focused task to the previous stage."""
        self._move_current_task(Direction.BACKWARD)

    def action_move_task_forward(self) -> None:
        """Move the focused task to the next stage."""
        self._move_current_task(Direction.FORWARD)

    def _move_current_task(self, direction: Direction) -> None:
        task = self._current_task()
        if task is None or self._refuse_if_busy():
            return

        target = transition(task.stage, direction)
        if target is None:
            # Already in the first/last column
            return

        title = self.config_service.get_board_config().get_title(target)
        self._start(
            self.board_service.move(task, direction),
            success_message=f"Moved to {title}",
            focus_task_id=task.id,
        )

    def _current_task(self) -> Task | None:
        screen = self._board_screen()
        if screen is None:
            return None
        return screen.get_current_task()


def run(settings: Settings | None = None) -> None:
    """Run the taskboard application."""
    app = TaskboardApp(settings)
    app.run()
