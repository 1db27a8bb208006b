"""Tests for app action handlers.

These tests verify that user feedback (notifications and the status bar)
follows each board operation, and that cancelled or impossible actions
never reach the board service.
"""

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest

from taskboard.app import TaskboardApp
from taskboard.models import Board, BoardConfig, Stage, Task, TaskDraft
from taskboard.services import BoardError
from taskboard.ui.screens.board import BoardScreen


def make_app(busy: bool = False) -> TaskboardApp:
    """Build an app without starting Textual."""
    app = TaskboardApp.__new__(TaskboardApp)
    app.notify = MagicMock()
    app.push_screen = MagicMock()
    app.run_worker = MagicMock()
    app.config_service = MagicMock()
    app.config_service.get_board_config.return_value = BoardConfig.default()
    app.board_service = MagicMock()
    app.board_service.busy = busy
    app.board_service.error = None
    app.board_service.board = Board()
    return app


def make_screen(task: Task | None = None) -> MagicMock:
    screen = MagicMock(spec=BoardScreen)
    screen.get_current_task.return_value = task
    screen.current_stage = task.stage if task else Stage.TODO
    return screen


def on_screen(screen):
    return patch.object(TaskboardApp, "screen", new_callable=PropertyMock, return_value=screen)


class TestRunBoardAction:
    """Tests for run_board_action feedback."""

    @pytest.mark.anyio
    async def test_success_renders_board_and_notifies(self):
        app = make_app()
        screen = make_screen()
        action = AsyncMock(return_value=())

        with on_screen(screen):
            ok = await app.run_board_action(action(), success_message="Task created", focus_task_id=3)

        assert ok is True
        screen.set_status.assert_any_call(busy=True)
        screen.set_status.assert_called_with(False, None)
        screen.show_board.assert_called_once_with(app.board_service.board, focus_task_id=3)
        app.notify.assert_called_once_with("Task created", timeout=2)

    @pytest.mark.anyio
    async def test_failure_notifies_error_and_keeps_board(self):
        app = make_app()
        app.board_service.error = "Could not move task"
        screen = make_screen()
        action = AsyncMock(side_effect=BoardError("Could not move task"))

        with on_screen(screen):
            ok = await app.run_board_action(action(), success_message="Moved to Done")

        assert ok is False
        screen.show_board.assert_not_called()
        screen.set_status.assert_called_with(False, "Could not move task")
        app.notify.assert_called_once()
        call_args = app.notify.call_args
        assert call_args[0][0] == "Could not move task"
        assert call_args[1]["severity"] == "error"

    @pytest.mark.anyio
    async def test_failure_hands_error_to_on_failure(self):
        app = make_app()
        on_failure = MagicMock()
        error = BoardError("Could not create task")

        with on_screen(make_screen()):
            await app.run_board_action(AsyncMock(side_effect=error)(), on_failure=on_failure)

        on_failure.assert_called_once_with(error)

    @pytest.mark.anyio
    async def test_success_skips_on_failure(self):
        app = make_app()
        on_failure = MagicMock()

        with on_screen(make_screen()):
            await app.run_board_action(AsyncMock(return_value=())(), on_failure=on_failure)

        on_failure.assert_not_called()

    @pytest.mark.anyio
    async def test_refresh_without_message_does_not_notify(self):
        app = make_app()
        screen = make_screen()

        with on_screen(screen):
            await app.run_board_action(AsyncMock(return_value=())())

        app.notify.assert_not_called()
        screen.show_board.assert_called_once()


class TestFormActions:
    """Tests for the create and edit forms."""

    def test_new_task_opens_form_in_focused_column(self):
        app = make_app()
        screen = make_screen()
        screen.current_stage = Stage.IN_PROGRESS

        with on_screen(screen), patch("taskboard.app.TaskFormModal") as form_cls:
            app.action_new_task()

        assert form_cls.call_args[1]["default_stage"] == Stage.IN_PROGRESS
        app.push_screen.assert_called_once()
        assert app.push_screen.call_args[0][0] is form_cls.return_value

    def test_cancelled_new_task_form_sends_nothing(self):
        app = make_app()
        app._handle_new_task_form(None)

        app.run_worker.assert_not_called()
        app.board_service.create.assert_not_called()

    def test_submitted_new_task_form_creates(self):
        app = make_app()
        app.run_board_action = MagicMock()
        draft = TaskDraft(title="Write spec")

        app._handle_new_task_form(draft)

        app.board_service.create.assert_called_once_with(draft)
        app.run_worker.assert_called_once()

    def test_cancelled_edit_form_sends_nothing(self):
        app = make_app()
        app._handle_edit_task_form(1, None)

        app.board_service.update.assert_not_called()

    def test_submitted_edit_form_updates_and_keeps_focus(self):
        app = make_app()
        app.run_board_action = MagicMock()
        draft = TaskDraft(title="Renamed", stage=Stage.DONE)

        app._handle_edit_task_form(1, draft)

        app.board_service.update.assert_called_once_with(1, draft)
        kwargs = app.run_board_action.call_args[1]
        assert kwargs["focus_task_id"] == 1
        assert kwargs["success_message"] == "Task updated"

    def test_edit_without_focused_task_does_nothing(self):
        app = make_app()

        with on_screen(make_screen(None)):
            app.action_edit_task()

        app.push_screen.assert_not_called()


class TestFormReopenOnFailure:
    """A failed save gives the entered values back in a new form."""

    def test_failed_create_reopens_form_with_draft(self):
        app = make_app()
        app.run_board_action = MagicMock()
        draft = TaskDraft(title="Write spec", description="typed text", stage=Stage.DONE)
        app._handle_new_task_form(draft)
        on_failure = app.run_board_action.call_args[1]["on_failure"]

        with patch("taskboard.app.TaskFormModal") as form_cls:
            on_failure(BoardError("Could not create task"))

        assert form_cls.call_args[0][0] is None
        assert form_cls.call_args[1]["draft"] is draft
        assert form_cls.call_args[1]["default_stage"] == Stage.DONE
        assert form_cls.call_args[1]["error"] == "Could not create task"
        assert app.push_screen.call_args[1]["callback"] == app._handle_new_task_form

    def test_failed_update_reopens_edit_form(self):
        app = make_app()
        app.run_board_action = MagicMock()
        task = Task(id=2, title="Review PR", stage=Stage.IN_PROGRESS)
        app.board_service.get_task.return_value = task
        draft = TaskDraft(title="Review PR #4", stage=Stage.IN_PROGRESS)
        app._handle_edit_task_form(2, draft)
        on_failure = app.run_board_action.call_args[1]["on_failure"]

        with patch("taskboard.app.TaskFormModal") as form_cls:
            on_failure(BoardError("Could not update task"))

        assert form_cls.call_args[0][0] is task
        assert form_cls.call_args[1]["draft"] is draft
        assert form_cls.call_args[1]["error"] == "Could not update task"

        # Saving the reopened form updates the same task again
        resubmitted = TaskDraft(title="Review PR #5", stage=Stage.DONE)
        app.push_screen.call_args[1]["callback"](resubmitted)
        app.board_service.update.assert_called_with(2, resubmitted)

    def test_failed_update_of_removed_task_does_not_reopen(self):
        app = make_app()
        app.run_board_action = MagicMock()
        app.board_service.get_task.return_value = None
        app._handle_edit_task_form(2, TaskDraft(title="Gone"))
        on_failure = app.run_board_action.call_args[1]["on_failure"]

        on_failure(BoardError("Could not update task: not on the board"))

        app.push_screen.assert_not_called()


class TestDeleteAction:
    """Tests for delete confirmation."""

    def test_delete_asks_for_confirmation(self):
        app = make_app()
        task = Task(id=1, title="Write spec")

        with on_screen(make_screen(task)), patch("taskboard.app.ConfirmModal") as confirm_cls:
            app.action_delete_task()

        confirm_cls.assert_called_once_with("Delete 'Write spec'?")
        assert app.push_screen.call_args[0][0] is confirm_cls.return_value
        app.board_service.delete.assert_not_called()

    def test_declined_confirmation_sends_nothing(self):
        app = make_app()
        app._handle_delete_confirm(1, False)

        app.board_service.delete.assert_not_called()
        app.run_worker.assert_not_called()

    def test_confirmed_delete_runs(self):
        app = make_app()
        app.run_board_action = MagicMock()

        app._handle_delete_confirm(1, True)

        app.board_service.delete.assert_called_once_with(1)
        assert app.run_board_action.call_args[1]["success_message"] == "Task deleted"

    def test_confirmation_disabled_deletes_directly(self):
        app = make_app()
        app.run_board_action = MagicMock()
        app.config_service.get_board_config.return_value = BoardConfig(
            columns=BoardConfig.default().columns, confirm_delete=False
        )
        task = Task(id=4, title="Plan sprint")

        with on_screen(make_screen(task)):
            app.action_delete_task()

        app.push_screen.assert_not_called()
        app.board_service.delete.assert_called_once_with(4)


class TestMoveActions:
    """Tests for moving the focused task."""

    def test_move_forward_starts_worker(self):
        app = make_app()
        app.run_board_action = MagicMock()
        task = Task(id=1, title="Write spec", stage=Stage.TODO)

        with on_screen(make_screen(task)):
            app.action_move_task_forward()

        app.board_service.move.assert_called_once()
        assert app.run_board_action.call_args[1]["success_message"] == "Moved to In Progress"
        app.run_worker.assert_called_once()

    def test_move_backward_from_todo_is_silent(self):
        app = make_app()
        task = Task(id=1, title="Write spec", stage=Stage.TODO)

        with on_screen(make_screen(task)):
            app.action_move_task_backward()

        app.board_service.move.assert_not_called()
        app.run_worker.assert_not_called()
        app.notify.assert_not_called()

    def test_move_forward_from_done_is_silent(self):
        app = make_app()
        task = Task(id=3, title="Ship it", stage=Stage.DONE)

        with on_screen(make_screen(task)):
            app.action_move_task_forward()

        app.board_service.move.assert_not_called()
        app.run_worker.assert_not_called()


class TestBusyRefusal:
    """Changes are refused while a previous one is in flight."""

    def test_move_refused_while_busy(self):
        app = make_app(busy=True)
        task = Task(id=2, title="Review PR", stage=Stage.IN_PROGRESS)

        with on_screen(make_screen(task)):
            app.action_move_task_forward()

        app.board_service.move.assert_not_called()
        app.notify.assert_called_once()
        assert app.notify.call_args[1]["severity"] == "warning"

    def test_new_task_refused_while_busy(self):
        app = make_app(busy=True)

        with on_screen(make_screen()):
            app.action_new_task()

        app.push_screen.assert_not_called()
