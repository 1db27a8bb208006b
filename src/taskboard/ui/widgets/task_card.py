"""Task card widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    def __init__(self, task_data: Task, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        title = self._truncate(self._task_data.title, 40)
        yield Static(escape(title), classes="task-title")

        preview = self._get_description_preview()
        if preview:
            yield Static(escape(preview), classes="task-preview")

        yield Static(self._format_moves(), classes="task-moves")

    def _format_moves(self) -> str:
        """Arrows for the moves available from this task's stage."""
        stage = self._task_data.stage
        back = "←" if stage.previous() is not None else " "
        forward = "→" if stage.next() is not None else " "
        return f"[dim]{back} #{escape(str(self._task_data.id))} {forward}[/]"

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """Get first non-empty line of the description."""
        for line in self._task_data.description.split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 50)
        return ""
