"""Data models."""

from .board import Board, find_duplicate_ids, partition_tasks
from .board_config import BoardConfig, ColumnConfig, TaskboardConfig
from .enums import (
    Direction,
    Stage,
    WireFormat,
    next_stage,
    previous_stage,
    resolve_stage,
    stage_order,
    transition,
)
from .task import Task, TaskDraft, TaskId

__all__ = [
    "Board",
    "BoardConfig",
    "ColumnConfig",
    "Direction",
    "Stage",
    "Task",
    "TaskDraft",
    "TaskId",
    "TaskboardConfig",
    "WireFormat",
    "find_duplicate_ids",
    "next_stage",
    "partition_tasks",
    "previous_stage",
    "resolve_stage",
    "stage_order",
    "transition",
]
