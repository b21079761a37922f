"""REST-backed store talking to the dashboard's task endpoints."""

from __future__ import annotations

import logging
from typing import Any

from ..api.client import ApiClient, ApiError, ApiNotFoundError, parse_response
from ..models import Task
from .protocol import TaskStoreError

logger = logging.getLogger(__name__)


class HttpTaskStore:
    """
    Store backed by the task REST API.

    Endpoints:
    - GET   /api/tasks?board_id=...
    - GET   /api/tasks/{id}
    - POST  /api/tasks
    - PATCH /api/tasks/{id}
    - POST  /api/tasks/{id}/move  {"status": ..., "position": ...}

    API failures surface as TaskStoreError with the original ApiError chained.
    """

    def __init__(self, client: ApiClient, board_id: str | None = None) -> None:
        self._client = client
        self.board_id = board_id

    async def get_all(self) -> list[Task]:
        params = {"board_id": self.board_id} if self.board_id else None
        try:
            data = await self._client.get("/api/tasks", params=params)
        except ApiError as e:
            raise TaskStoreError(f"Failed to load tasks: {e}") from e
        # Accept both a bare list and {"tasks": [...]}
        if isinstance(data, dict):
            data = data.get("tasks", [])
        tasks = self._parse(data or [], list[Task])
        logger.info("Loaded %d tasks from %s", len(tasks), self._client.base_url)
        return tasks

    async def get_by_id(self, task_id: str) -> Task | None:
        try:
            data = await self._client.get(f"/api/tasks/{task_id}")
        except ApiNotFoundError:
            return None
        except ApiError as e:
            raise TaskStoreError(f"Failed to load task {task_id}: {e}") from e
        return self._parse(data, Task)

    async def move_task(self, task_id: str, new_status: str, new_position: int) -> None:
        try:
            await self._client.post(
                f"/api/tasks/{task_id}/move",
                json={"status": new_status, "position": new_position},
            )
        except ApiError as e:
            raise TaskStoreError(f"Failed to move task {task_id}: {e}") from e

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        try:
            data = await self._client.patch(f"/api/tasks/{task_id}", json=_jsonable(fields))
        except ApiError as e:
            raise TaskStoreError(f"Failed to update task {task_id}: {e}") from e
        return self._parse(data, Task)

    async def create_task(self, fields: dict[str, Any]) -> Task:
        payload = _jsonable(fields)
        if self.board_id and "board_id" not in payload:
            payload["board_id"] = self.board_id
        try:
            data = await self._client.post("/api/tasks", json=payload)
        except ApiError as e:
            raise TaskStoreError(f"Failed to create task: {e}") from e
        return self._parse(data, Task)

    def _parse(self, data: Any, model: Any) -> Any:
        try:
            return parse_response(data, model)
        except ApiError as e:
            raise TaskStoreError(str(e)) from e


def _jsonable(fields: dict[str, Any]) -> dict[str, Any]:
    """Render datetimes as ISO strings for the request body."""
    return {
        key: value.isoformat() if hasattr(value, "isoformat") else value
        for key, value in fields.items()
    }
