"""Main kanban board screen."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...models import Board, BoardConfig, Stage, Task, TaskId, stage_order
from ..widgets.column import KanbanColumn


class BoardScreen(Screen):
    """Kanban board screen: one column per stage, with navigation."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        self._pending_focus_id: TaskId | None = None

    @property
    def board_config(self) -> BoardConfig:
        """Get board configuration from app."""
        return self.app.config_service.get_board_config()  # pyrefly: ignore[missing-attribute]

    @property
    def stages(self) -> tuple[Stage, ...]:
        return stage_order()

    @property
    def column_count(self) -> int:
        return len(self.stages)

    def compose(self) -> ComposeResult:
        """Create the board layout."""
        yield Header()

        with Container(id="board-container"), Horizontal(id="columns"):
            for stage in self.stages:
                yield KanbanColumn(
                    title=self.board_config.get_title(stage),
                    stage=stage,
                    id=_column_widget_id(stage),
                )

        yield Static("", id="status-bar")
        yield Footer()

    def show_board(self, board: Board, focus_task_id: TaskId | None = None) -> None:
        """
        Populate columns from a partitioned board.

        Args:
            board: The partitioned working set
            focus_task_id: If provided, focus this task after rendering.
                           If None, keeps the current position.
        """
        for index, stage in enumerate(self.stages):
            column = self._get_column(index)
            if column is not None:
                column.set_tasks(board.get_column(stage))

        self._pending_focus_id = focus_task_id
        # Defer focus until after DOM is rebuilt (double-defer so columns finish first)
        self.call_after_refresh(self._schedule_pending_focus)

    def set_status(self, busy: bool, error: str | None = None) -> None:
        """Show the busy indicator or the last error in the status bar."""
        try:
            status = self.query_one("#status-bar", Static)
        except Exception:
            return
        if error:
            status.update(f"[b red]{escape(error)}[/]")
        elif busy:
            status.update("[dim]Loading…[/]")
        else:
            status.update("")

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _find_task_position(self, task_id: TaskId) -> tuple[int, int] | None:
        """Find a task's (column_index, task_index) by id."""
        for col_idx in range(self.column_count):
            column = self._get_column(col_idx)
            if column is None:
                continue
            for task_idx, task in enumerate(column.tasks):
                if task.id == task_id:
                    return (col_idx, task_idx)
        return None

    def _apply_pending_focus(self) -> None:
        if self._pending_focus_id is not None:
            position = self._find_task_position(self._pending_focus_id)
            self._pending_focus_id = None
            if position:
                self._current_column, self._current_task = position
                self._update_focus()
                return

        # Fallback: keep the previous position, clamped to the column
        column = self._get_column(self._current_column)
        if column and column.task_count > 0:
            self._current_task = min(self._current_task, column.task_count - 1)
        else:
            self._current_task = 0
        self._update_focus()

    def navigate_column(self, delta: int) -> None:
        """Navigate between columns."""
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))

        if new_column != self._current_column:
            self._current_column = new_column
            column = self._get_column(new_column)
            if column and column.task_count > 0:
                self._current_task = min(self._current_task, column.task_count - 1)
            else:
                self._current_task = 0
            self._update_focus()

    def navigate_task(self, delta: int) -> None:
        """Navigate between tasks in current column."""
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return

        new_task = max(0, min(self._current_task + delta, column.task_count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            self._update_focus()

    def _get_column(self, index: int) -> KanbanColumn | None:
        """Get column widget by index."""
        if index < 0 or index >= self.column_count:
            return None
        try:
            return self.query_one(f"#{_column_widget_id(self.stages[index])}", KanbanColumn)
        except Exception:
            return None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        """Get the currently focused task."""
        column = self._get_column(self._current_column)
        if column:
            return column.get_task(self._current_task)
        return None

    @property
    def current_stage(self) -> Stage:
        """Stage of the focused column."""
        return self.stages[self._current_column]


def _column_widget_id(stage: Stage) -> str:
    """CSS-safe widget id (underscores are replaced with hyphens)."""
    return f"column-{stage.value.replace('_', '-')}"
