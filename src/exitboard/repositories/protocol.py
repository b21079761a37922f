"""Store protocol for task persistence backends."""

from typing import Any, Protocol

from ..models import Task


class TaskStoreError(Exception):
    """A store could not complete an operation."""


class TaskStoreProtocol(Protocol):
    """Interface for task persistence backends.

    All operations are coroutines: callers await them from the event loop
    and the UI keeps running while a write is in flight. Implementations:
    - Filesystem (markdown files with front matter)
    - REST API (the dashboard's task endpoints)
    """

    async def get_all(self) -> list[Task]:
        """Load all tasks.

        Returns:
            Every task on the board, in no particular order.
        """
        ...

    async def get_by_id(self, task_id: str) -> Task | None:
        """Get a single task by ID, or None if it does not exist."""
        ...

    async def move_task(self, task_id: str, new_status: str, new_position: int) -> None:
        """Place a task at ``new_position`` of column ``new_status``.

        Raises:
            TaskStoreError: the move could not be persisted.
        """
        ...

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        """Apply a partial update and return the stored task.

        Raises:
            TaskStoreError: unknown task or failed write.
        """
        ...

    async def create_task(self, fields: dict[str, Any]) -> Task:
        """Create a task from partial fields and return it with its ID.

        Raises:
            TaskStoreError: the task could not be created.
        """
        ...
