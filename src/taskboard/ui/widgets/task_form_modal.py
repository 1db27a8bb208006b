"""Create/edit form modal."""

from pydantic import ValidationError
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static, TextArea

from ...models import BoardConfig, Stage, Task, TaskDraft, stage_order


class TaskFormModal(ModalScreen[TaskDraft | None]):
    """Form for a new task or for editing an existing one.

    Dismisses with the entered TaskDraft, or None when cancelled.
    Blank titles are refused in place; the form stays open. After a failed
    save the app reopens it with the entered values and the error.
    """

    DEFAULT_CSS = """
    TaskFormModal {
        align: center middle;
    }

    TaskFormModal > Vertical {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TaskFormModal #form-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    TaskFormModal TextArea {
        height: 6;
    }

    TaskFormModal #form-error {
        color: $error;
        height: auto;
    }

    TaskFormModal .buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    TaskFormModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        task_data: Task | None = None,
        default_stage: Stage = Stage.TODO,
        board_config: BoardConfig | None = None,
        draft: TaskDraft | None = None,
        error: str | None = None,
    ) -> None:
        """Initialize the form.

        Args:
            task_data: Task being edited, or None for a new task
            default_stage: Initial stage for a new task
            board_config: Column titles used as stage labels
            draft: Previously entered values, shown instead of task_data
            error: Message from a failed save, shown under the fields
        """
        super().__init__()
        self._task_data = task_data
        self._prefill = draft
        self._save_error = error
        if draft is not None:
            self._default_stage = draft.stage
        elif task_data is not None:
            self._default_stage = task_data.stage
        else:
            self._default_stage = default_stage
        self._board_config = board_config or BoardConfig.default()

    @property
    def is_edit(self) -> bool:
        return self._task_data is not None

    @property
    def initial_title(self) -> str:
        source = self._prefill if self._prefill is not None else self._task_data
        return source.title if source else ""

    @property
    def initial_description(self) -> str:
        source = self._prefill if self._prefill is not None else self._task_data
        return source.description if source else ""

    def compose(self) -> ComposeResult:
        heading = "Edit Task" if self.is_edit else "New Task"
        with Vertical():
            yield Label(heading, id="form-title")
            yield Label("Title *")
            yield Input(
                value=self.initial_title,
                placeholder="Task title",
                id="title",
            )
            yield Label("Description")
            yield TextArea(
                self.initial_description,
                id="description",
            )
            yield Label("Stage")
            yield Select(
                [(self._board_config.get_title(stage), stage) for stage in stage_order()],
                value=self._default_stage,
                allow_blank=False,
                id="stage",
            )
            yield Static(self._save_error or "", id="form-error")
            with Center(classes="buttons"):
                yield Button("Save" if self.is_edit else "Create", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.action_save()
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_save()

    def build_draft(self) -> TaskDraft:
        """Read the form fields into a draft.

        Raises:
            ValidationError: If the title is blank.
        """
        return TaskDraft(
            title=self.query_one("#title", Input).value,
            description=self.query_one("#description", TextArea).text,
            stage=self.query_one("#stage", Select).value,
        )

    def action_save(self) -> None:
        try:
            draft = self.build_draft()
        except ValidationError:
            self.query_one("#form-error", Static).update("Title is required")
            self.query_one("#title", Input).focus()
            return
        self.dismiss(draft)

    def action_cancel(self) -> None:
        self.dismiss(None)
