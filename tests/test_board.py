"""Tests for partitioning the working set into stage columns."""

import itertools

from taskboard.models import (
    Board,
    BoardConfig,
    ColumnConfig,
    Stage,
    Task,
    find_duplicate_ids,
    partition_tasks,
)


def _tasks(*stages: Stage) -> list[Task]:
    return [Task(id=i, title=f"Task {i}", stage=stage) for i, stage in enumerate(stages, start=1)]


class TestPartitionTasks:
    """Tests for partition_tasks."""

    def test_empty_working_set_gives_three_empty_columns(self):
        columns = partition_tasks([])
        assert list(columns) == [Stage.TODO, Stage.IN_PROGRESS, Stage.DONE]
        assert all(tasks == () for tasks in columns.values())

    def test_each_task_lands_in_its_stage(self, sample_tasks):
        columns = partition_tasks(sample_tasks)
        for stage, tasks in columns.items():
            assert all(task.stage == stage for task in tasks)

    def test_union_equals_working_set(self):
        stages = list(Stage)
        for combo in itertools.product(stages, repeat=4):
            tasks = _tasks(*combo)
            columns = partition_tasks(tasks)
            flattened = [t for column in columns.values() for t in column]
            assert sorted(t.id for t in flattened) == [t.id for t in tasks]
            assert len(flattened) == len(tasks)

    def test_relative_order_preserved(self):
        tasks = _tasks(Stage.DONE, Stage.TODO, Stage.DONE, Stage.TODO, Stage.IN_PROGRESS)
        columns = partition_tasks(tasks)
        assert [t.id for t in columns[Stage.TODO]] == [2, 4]
        assert [t.id for t in columns[Stage.DONE]] == [1, 3]
        assert [t.id for t in columns[Stage.IN_PROGRESS]] == [5]

    def test_deterministic(self, sample_tasks):
        assert partition_tasks(sample_tasks) == partition_tasks(sample_tasks)

    def test_input_is_not_modified(self, sample_tasks):
        before = list(sample_tasks)
        partition_tasks(sample_tasks)
        assert sample_tasks == before


class TestBoard:
    """Tests for the Board model."""

    def test_from_tasks_properties(self, sample_tasks):
        board = Board.from_tasks(sample_tasks)
        assert [t.title for t in board.todo] == ["Write spec", "Plan sprint"]
        assert [t.title for t in board.in_progress] == ["Review PR"]
        assert [t.title for t in board.done] == ["Ship it"]
        assert board.task_count == 4

    def test_default_board_is_empty(self):
        board = Board()
        assert board.task_count == 0
        assert board.get_column(Stage.DONE) == ()

    def test_visible_columns_default_titles(self, sample_tasks):
        board = Board.from_tasks(sample_tasks)
        columns = board.get_visible_columns()
        assert [(stage, title) for stage, title, _ in columns] == [
            (Stage.TODO, "To Do"),
            (Stage.IN_PROGRESS, "In Progress"),
            (Stage.DONE, "Done"),
        ]
        assert len(columns[0][2]) == 2

    def test_visible_columns_configured_titles(self):
        config = BoardConfig(
            columns=[
                ColumnConfig(stage=Stage.TODO, title="A Fazer"),
                ColumnConfig(stage=Stage.IN_PROGRESS, title="Em Progresso"),
                ColumnConfig(stage=Stage.DONE, title="Concluídas"),
            ]
        )
        titles = [title for _, title, _ in Board().get_visible_columns(config)]
        assert titles == ["A Fazer", "Em Progresso", "Concluídas"]


class TestFindDuplicateIds:
    """Tests for detecting repeated task ids."""

    def test_unique_ids(self, sample_tasks):
        assert find_duplicate_ids(sample_tasks) == []

    def test_each_repeated_id_reported_once(self):
        tasks = [
            Task(id=1, title="a"),
            Task(id=2, title="b"),
            Task(id=1, title="c"),
            Task(id=1, title="d"),
            Task(id="x", title="e"),
            Task(id="x", title="f"),
        ]
        assert find_duplicate_ids(tasks) == [1, "x"]
