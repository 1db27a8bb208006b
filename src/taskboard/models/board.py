"""Board state models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .enums import Stage, stage_order
from .task import Task, TaskId

if TYPE_CHECKING:
    from .board_config import BoardConfig


def find_duplicate_ids(tasks: Iterable[Task]) -> list[TaskId]:
    """Ids held by more than one task, in order of first repeat."""
    seen: set[TaskId] = set()
    duplicates: list[TaskId] = []
    for task in tasks:
        if task.id in seen and task.id not in duplicates:
            duplicates.append(task.id)
        seen.add(task.id)
    return duplicates


def partition_tasks(tasks: Iterable[Task]) -> dict[Stage, tuple[Task, ...]]:
    """
    Split tasks into one ordered sequence per stage.

    Keys follow stage order; each sequence keeps the relative order of
    the input. Every task lands in exactly one sequence.
    """
    buckets: dict[Stage, list[Task]] = {stage: [] for stage in stage_order()}
    for task in tasks:
        buckets[task.stage].append(task)
    return {stage: tuple(items) for stage, items in buckets.items()}


class Board(BaseModel):
    """Working set partitioned into stage columns."""

    model_config = ConfigDict(frozen=True)

    columns: dict[Stage, tuple[Task, ...]] = Field(
        default_factory=lambda: partition_tasks(())
    )

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> Board:
        """Create Board from tasks, grouping by stage."""
        return cls(columns=partition_tasks(tasks))

    def get_column(self, stage: Stage) -> tuple[Task, ...]:
        """Get tasks for a specific stage."""
        return self.columns.get(stage, ())

    def get_visible_columns(
        self, config: BoardConfig | None = None
    ) -> list[tuple[Stage, str, tuple[Task, ...]]]:
        """
        Get columns with their display titles.

        Returns:
            List of (stage, title, tasks) tuples in stage order.
        """
        # Import here to avoid circular import
        from .board_config import BoardConfig as BC

        if config is None:
            config = BC.default()

        return [(stage, config.get_title(stage), self.get_column(stage)) for stage in stage_order()]

    @property
    def todo(self) -> tuple[Task, ...]:
        return self.get_column(Stage.TODO)

    @property
    def in_progress(self) -> tuple[Task, ...]:
        return self.get_column(Stage.IN_PROGRESS)

    @property
    def done(self) -> tuple[Task, ...]:
        return self.get_column(Stage.DONE)

    @property
    def task_count(self) -> int:
        """Total number of tasks across all columns."""
        return sum(len(tasks) for tasks in self.columns.values())
