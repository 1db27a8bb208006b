"""Shared fixtures: an in-memory task store standing in for the remote collection."""

import asyncio

import pytest

from taskboard.models import Stage, Task, TaskDraft, TaskId
from taskboard.repositories import RepositoryError
from taskboard.services import BoardService


class InMemoryTaskRepository:
    """Fake repository with the reference backend's rules.

    Ids are sequential integers starting at 1, unknown ids fail,
    and operations listed in ``fail_on`` raise RepositoryError.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.next_id = max((t.id for t in self.tasks if isinstance(t.id, int)), default=0) + 1
        self.fail_on: set[str] = set()
        self.calls: list[tuple] = []

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise RepositoryError(f"{operation}: HTTP 500: boom")

    async def get_all(self) -> list[Task]:
        self.calls.append(("get_all",))
        self._check("get_all")
        return list(self.tasks)

    async def create(self, draft: TaskDraft) -> Task:
        self.calls.append(("create", draft))
        self._check("create")
        task = Task(id=self.next_id, **draft.model_dump())
        self.next_id += 1
        self.tasks.append(task)
        return task

    async def update(self, task_id: TaskId, draft: TaskDraft) -> Task:
        self.calls.append(("update", task_id, draft))
        self._check("update")
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[i] = Task(id=task_id, **draft.model_dump())
                return self.tasks[i]
        raise RepositoryError(f"update task: Not found: /tasks/{task_id}")

    async def delete(self, task_id: TaskId) -> None:
        self.calls.append(("delete", task_id))
        self._check("delete")
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                del self.tasks[i]
                return
        raise RepositoryError(f"delete task: Not found: /tasks/{task_id}")

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


class GatedTaskRepository(InMemoryTaskRepository):
    """In-memory repository whose get_all calls block until released.

    Each get_all snapshots the store when called, then waits on the
    gate with the same index before returning the snapshot.
    """

    def __init__(self, tasks: list[Task] | None = None, gates: int = 2) -> None:
        super().__init__(tasks)
        self.gates = [asyncio.Event() for _ in range(gates)]
        self.get_all_started = 0

    async def get_all(self) -> list[Task]:
        snapshot = await super().get_all()
        index = self.get_all_started
        self.get_all_started += 1
        await self.gates[index].wait()
        return snapshot


async def wait_until(condition, attempts: int = 200) -> None:
    """Yield to the event loop until condition() is true."""
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def sample_tasks() -> list[Task]:
    return [
        Task(id=1, title="Write spec", description="First draft", stage=Stage.TODO),
        Task(id=2, title="Review PR", stage=Stage.IN_PROGRESS),
        Task(id=3, title="Ship it", stage=Stage.DONE),
        Task(id=4, title="Plan sprint", stage=Stage.TODO),
    ]


@pytest.fixture
def repo(sample_tasks: list[Task]) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(sample_tasks)


@pytest.fixture
def empty_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def board_service(repo: InMemoryTaskRepository) -> BoardService:
    return BoardService(repo)
