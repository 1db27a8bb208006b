"""HTTP repository backed by the remote task collection."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..api import TaskApiClient, TaskApiError
from ..models import Task, TaskDraft, TaskId, WireFormat, find_duplicate_ids
from .protocol import RepositoryError

logger = logging.getLogger(__name__)


class HttpTaskRepository:
    """Repository implementation for a JSON ``/tasks`` endpoint."""

    def __init__(
        self,
        client: TaskApiClient,
        wire_format: WireFormat = WireFormat.STANDARD,
    ) -> None:
        """
        Initialize the HTTP repository.

        Args:
            client: Configured API client
            wire_format: Field naming for request bodies
        """
        self.client = client
        self.wire_format = WireFormat(wire_format)

    async def get_all(self) -> list[Task]:
        """Fetch the whole collection."""
        data = await self._call("list tasks", self.client.list_tasks())
        if data is None:
            # Some backends encode an empty collection as null
            return []
        if not isinstance(data, list):
            logger.error("list tasks: expected a JSON array, got %s", type(data).__name__)
            raise RepositoryError("list tasks: expected a JSON array")
        tasks = [self._parse_task(item, "list tasks") for item in data]
        duplicates = find_duplicate_ids(tasks)
        if duplicates:
            logger.error("list tasks: duplicate task ids %s", duplicates)
            raise RepositoryError(f"list tasks: duplicate task ids {duplicates}")
        return tasks

    async def create(self, draft: TaskDraft) -> Task:
        """Create a task and return it with its assigned id."""
        body = draft.to_payload(self.wire_format)
        data = await self._call("create task", self.client.create_task(body))
        task = self._parse_task(data, "create task")
        logger.debug("Created remote task %s (stage=%s)", task.id, task.stage.value)
        return task

    async def update(self, task_id: TaskId, draft: TaskDraft) -> Task:
        """Replace title, description and stage of a task."""
        body = {"id": task_id, **draft.to_payload(self.wire_format)}
        data = await self._call("update task", self.client.replace_task(task_id, body))
        if data is None:
            # Backend confirmed without echoing the task
            return Task(id=task_id, **draft.model_dump())
        task = self._parse_task(data, "update task")
        logger.debug("Updated remote task %s (stage=%s)", task.id, task.stage.value)
        return task

    async def delete(self, task_id: TaskId) -> None:
        """Delete a task by id."""
        await self._call("delete task", self.client.delete_task(task_id))
        logger.debug("Deleted remote task %s", task_id)

    async def _call(self, operation: str, pending: Any) -> Any:
        """Await an API call, collapsing client errors into RepositoryError."""
        try:
            return await pending
        except TaskApiError as e:
            raise RepositoryError(f"{operation}: {e}") from e

    def _parse_task(self, data: Any, operation: str) -> Task:
        """Validate a JSON object as a Task."""
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            logger.error("%s: malformed task payload: %s", operation, e)
            raise RepositoryError(f"{operation}: malformed task payload") from e
