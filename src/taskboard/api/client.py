"""HTTP client for the remote task collection."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Base exception for task API errors."""

    pass


class TaskApiNotFoundError(TaskApiError):
    """Resource not found."""

    pass


class TaskApiRejectedError(TaskApiError):
    """Request rejected by the server (bad input)."""

    pass


class TaskApiClient:
    """Async client for a JSON task collection endpoint.

    Provides a thin wrapper around httpx with:
    - A configurable base URL (the collection lives at ``/tasks``)
    - Uniform error mapping for transport, status and payload failures
    - Request timing in the logs
    """

    COLLECTION_PATH = "/tasks"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8080``
            timeout: Request timeout in seconds (None waits indefinitely)
            transport: Optional transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @classmethod
    def task_path(cls, task_id: int | str) -> str:
        """Path of a single task resource."""
        return f"{cls.COLLECTION_PATH}/{task_id}"

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            json: Optional JSON body

        Returns:
            Decoded JSON, or None when the response has no body

        Raises:
            TaskApiNotFoundError: 404 response
            TaskApiRejectedError: 400 or 422 response
            TaskApiError: Transport failure, other non-2xx status, invalid JSON
        """
        logger.debug("%s %s: body=%s", method, path, json)

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise TaskApiError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise TaskApiNotFoundError(f"Not found: {path}")
        if status in (400, 422):
            logger.error("%s %s: %d Rejected (%.0fms)", method, path, status, elapsed_ms)
            raise TaskApiRejectedError(f"HTTP {status}: {response.text.strip()}")
        if not 200 <= status < 300:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise TaskApiError(f"HTTP {status}: {response.text.strip()}")

        logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        if status == 204 or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response (%.0fms)", method, path, elapsed_ms)
            raise TaskApiError(f"Invalid JSON response: {e}") from e

    async def list_tasks(self) -> Any:
        """GET the whole collection."""
        return await self.request("GET", self.COLLECTION_PATH)

    async def create_task(self, body: dict[str, Any]) -> Any:
        """POST a new task to the collection."""
        return await self.request("POST", self.COLLECTION_PATH, json=body)

    async def replace_task(self, task_id: int | str, body: dict[str, Any]) -> Any:
        """PUT the full representation of a task."""
        return await self.request("PUT", self.task_path(task_id), json=body)

    async def delete_task(self, task_id: int | str) -> Any:
        """DELETE a task."""
        return await self.request("DELETE", self.task_path(task_id))
