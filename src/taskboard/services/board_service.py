"""Service for board state management."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Mapping
from contextlib import asynccontextmanager, nullcontext
from typing import Any, TypeVar

from pydantic import ValidationError

from ..models import Board, Direction, Task, TaskDraft, TaskId, find_duplicate_ids, transition
from ..repositories import RepositoryError, RepositoryProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOAD_ERROR = "Could not load tasks"
CREATE_ERROR = "Could not create task"
UPDATE_ERROR = "Could not update task"
DELETE_ERROR = "Could not delete task"
MOVE_ERROR = "Could not move task"


class BoardError(Exception):
    """A board operation failed; the working set was left unchanged."""

    pass


class BoardValidationError(BoardError):
    """Input was rejected before any request was sent."""

    pass


class BoardService:
    """Holds the working set and keeps it mirrored from the repository.

    The working set is never edited locally. Every successful mutation is
    followed by a full refresh, and a failed operation leaves the working
    set exactly as it was.

    Mutations are not serialized by default: overlapping calls run
    concurrently and the last refresh to complete determines the working
    set. Pass ``serialize_mutations=True`` to run one mutation (with its
    refresh) at a time.
    """

    def __init__(
        self,
        repository: RepositoryProtocol,
        serialize_mutations: bool = False,
    ) -> None:
        self.repository = repository
        self.serialize_mutations = serialize_mutations
        self._tasks: tuple[Task, ...] = ()
        self._in_flight = 0
        self._error: str | None = None
        self._mutation_lock = asyncio.Lock() if serialize_mutations else None

    @property
    def tasks(self) -> tuple[Task, ...]:
        """The current working set, in repository order."""
        return self._tasks

    @property
    def board(self) -> Board:
        """The working set partitioned by stage."""
        return Board.from_tasks(self._tasks)

    @property
    def busy(self) -> bool:
        """True while any operation is awaiting the repository."""
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        """Message of the last failed operation, None after a success."""
        return self._error

    def get_task(self, task_id: TaskId) -> Task | None:
        """Get a task from the working set by id."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    async def refresh(self) -> tuple[Task, ...]:
        """Replace the working set with the repository's full collection."""
        async with self._operation():
            return await self._refresh()

    async def create(self, draft: TaskDraft | Mapping[str, Any]) -> tuple[Task, ...]:
        """Create a task, then refresh so it appears with its assigned id."""
        async with self._operation():
            validated = self._validate(draft)
            async with self._mutation():
                created = await self._attempt(self.repository.create(validated), CREATE_ERROR)
                logger.info("Task created: %s (stage=%s)", created.id, created.stage.value)
                return await self._refresh()

    async def update(
        self, task_id: TaskId, fields: TaskDraft | Mapping[str, Any]
    ) -> tuple[Task, ...]:
        """Replace a task's title, description and stage, then refresh."""
        async with self._operation():
            validated = self._validate(fields)
            return await self._update(task_id, validated, UPDATE_ERROR)

    async def delete(self, task_id: TaskId) -> tuple[Task, ...]:
        """
        Delete a task, then refresh.

        Confirmation is the caller's responsibility. The id is not checked
        against the working set; an unknown id fails at the repository.
        """
        async with self._operation(), self._mutation():
            await self._attempt(self.repository.delete(task_id), DELETE_ERROR)
            logger.info("Task deleted: %s", task_id)
            return await self._refresh()

    async def move(self, task: Task, direction: Direction) -> tuple[Task, ...] | None:
        """
        Move a task one stage forward or backward.

        Returns None without contacting the repository when the task is
        already at the boundary in that direction. The no-op still counts
        as an operation and clears the last error.
        """
        direction = Direction(direction)
        target = transition(task.stage, direction)
        if target is None:
            self._error = None
            logger.debug(
                "move: %s already at boundary (%s, %s)",
                task.id,
                task.stage.value,
                direction.value,
            )
            return None

        async with self._operation():
            result = await self._update(task.id, task.to_draft(stage=target), MOVE_ERROR)
            logger.info("Task moved: %s (%s -> %s)", task.id, task.stage.value, target.value)
            return result

    async def _update(self, task_id: TaskId, draft: TaskDraft, message: str) -> tuple[Task, ...]:
        if self.get_task(task_id) is None:
            logger.debug("update: task not on board: %s", task_id)
            self._error = f"{message}: not on the board"
            raise BoardError(self._error)
        async with self._mutation():
            await self._attempt(self.repository.update(task_id, draft), message)
            return await self._refresh()

    async def _refresh(self) -> tuple[Task, ...]:
        tasks = await self._attempt(self.repository.get_all(), LOAD_ERROR)
        duplicates = find_duplicate_ids(tasks)
        if duplicates:
            logger.warning("%s: duplicate task ids %s", LOAD_ERROR, duplicates)
            self._error = LOAD_ERROR
            raise BoardError(LOAD_ERROR)
        self._tasks = tuple(tasks)
        logger.debug("Board refreshed: %d tasks", len(self._tasks))
        return self._tasks

    async def _attempt(self, pending: Awaitable[T], message: str) -> T:
        """Await a repository call, converting failures into BoardError."""
        try:
            return await pending
        except RepositoryError as e:
            logger.warning("%s: %s", message, e)
            self._error = message
            raise BoardError(message) from e

    def _validate(self, draft: TaskDraft | Mapping[str, Any]) -> TaskDraft:
        if isinstance(draft, TaskDraft):
            return draft
        try:
            return TaskDraft.model_validate(dict(draft))
        except ValidationError as e:
            message = _first_error(e)
            logger.debug("Rejected task input: %s", message)
            self._error = message
            raise BoardValidationError(message) from e

    @asynccontextmanager
    async def _operation(self) -> AsyncIterator[None]:
        """Track an operation: clear the last error and hold the busy flag."""
        self._error = None
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    def _mutation(self) -> Any:
        """Single-flight guard when serialization is enabled."""
        if self._mutation_lock is None:
            return nullcontext()
        return self._mutation_lock


def _first_error(error: ValidationError) -> str:
    """Human-readable message of the first validation failure."""
    details = error.errors()
    if not details:
        return "Invalid task"
    detail = details[0]
    field = ".".join(str(part) for part in detail.get("loc", ()))
    msg = str(detail.get("msg", "invalid value"))
    # Pydantic prefixes messages raised from validators
    msg = msg.removeprefix("Value error, ")
    if field == "title" and detail.get("type") == "missing":
        return "Title is required"
    return msg if field == "title" else f"{field}: {msg}"

