"""Repository protocol for remote task stores."""

from typing import Protocol

from ..models import Task, TaskDraft, TaskId


class RepositoryError(Exception):
    """A repository operation failed.

    Transport failures, non-success statuses and malformed payloads all
    surface as this single error type.
    """

    pass


class RepositoryProtocol(Protocol):
    """Interface for task storage backends.

    Repositories own no state: every call goes to the backing store.
    All methods raise RepositoryError on failure.
    """

    async def get_all(self) -> list[Task]:
        """Load all tasks from the backend.

        Returns:
            List of all tasks, in the order the backend returns them.
        """
        ...

    async def create(self, draft: TaskDraft) -> Task:
        """Create a task.

        Args:
            draft: Title, description and stage of the new task.

        Returns:
            The created task with its backend-assigned id.
        """
        ...

    async def update(self, task_id: TaskId, draft: TaskDraft) -> Task:
        """Replace the editable fields of a task.

        Args:
            task_id: The task identifier.
            draft: The full replacement of title, description and stage.

        Returns:
            The updated task.
        """
        ...

    async def delete(self, task_id: TaskId) -> None:
        """Delete a task by ID.

        Note:
            Raises RepositoryError if the task doesn't exist.
        """
        ...
