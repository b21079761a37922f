"""Service owning the in-memory board state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..models import Board, BoardConfig, Task, normalize_positions
from ..repositories import TaskStoreProtocol

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)

# Placement is owned by the move resolver
_PLACEMENT_FIELDS = frozenset({"id", "status", "position"})


class BoardService:
    """Service for board state management.

    Holds the flat task list the UI renders from. Every change replaces the
    list (tasks are never mutated in place), which makes snapshots for
    optimistic updates a plain reference copy.

    A drag preview is kept as a separate overlay. While one is shown, the
    read side (``tasks``, ``board``, ``get_task``, ``column_tasks``) sees the
    preview, but ``snapshot``, ``replace_tasks``, ``restore`` and ``upsert``
    keep working on the committed list underneath it.
    """

    def __init__(
        self,
        store: TaskStoreProtocol,
        config_service: ConfigService | None = None,
    ) -> None:
        self.store = store
        self._config_service = config_service
        self._tasks: list[Task] = []
        self._preview: list[Task] | None = None

    @property
    def config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    @property
    def _shown(self) -> list[Task]:
        return self._preview if self._preview is not None else self._tasks

    @property
    def tasks(self) -> list[Task]:
        return list(self._shown)

    @property
    def board(self) -> Board:
        """Current board grouped by column."""
        return Board.from_tasks(self._shown, self.config)

    @property
    def has_preview(self) -> bool:
        return self._preview is not None

    async def load(self) -> Board:
        """Load all tasks from the store and return the grouped board.

        Column positions are renumbered 0..n-1 so that a task's position is
        also its index in the column.
        """
        config = self.config
        tasks = await self.store.get_all()
        self._tasks = normalize_positions(tasks, config.columns)
        self._preview = None
        renumbered = sum(1 for a, b in zip(tasks, self._tasks, strict=True) if a is not b)
        if renumbered:
            logger.debug("Renumbered %d task position(s) on load", renumbered)
        logger.info("Board loaded: %d tasks", len(self._tasks))
        board = self.board
        if board.orphaned:
            logger.warning(
                "%d task(s) have a status with no column and are hidden: %s",
                len(board.orphaned),
                ", ".join(f"{t.id}={t.status}" for t in board.orphaned),
            )
        return board

    def get_task(self, task_id: str) -> Task | None:
        for task in self._shown:
            if task.id == task_id:
                return task
        return None

    def column_tasks(self, status: str) -> list[Task]:
        """Tasks in a column, in display order, ignoring any filter."""
        return self.board.get_column(status)

    def snapshot(self) -> list[Task]:
        """Capture the committed task list for a later restore()."""
        return list(self._tasks)

    def restore(self, snapshot: list[Task]) -> None:
        self._tasks = list(snapshot)

    def replace_tasks(self, tasks: list[Task]) -> None:
        self._tasks = list(tasks)

    def show_preview(self, tasks: list[Task]) -> None:
        """Show ``tasks`` in place of the committed list until clear_preview()."""
        self._preview = list(tasks)

    def clear_preview(self) -> None:
        self._preview = None

    def upsert(self, task: Task) -> None:
        """Insert or replace a task by ID."""
        for i, existing in enumerate(self._tasks):
            if existing.id == task.id:
                self._tasks = [*self._tasks[:i], task, *self._tasks[i + 1 :]]
                return
        self._tasks = [*self._tasks, task]

    async def create_task(self, title: str, status: str | None = None, **fields: Any) -> Task:
        """
        Create a task at the end of a column.

        If status is not provided, the task goes to the first column.
        """
        config = self.config
        if status is None:
            status = config.columns[0].id
        elif not config.is_valid_status(status):
            raise ValueError(f"Unknown column: {status}")

        column = Board.from_tasks(self._tasks, config).get_column(status)
        position = column[-1].position + 1 if column else 0

        task = await self.store.create_task(
            {**fields, "title": title, "status": status, "position": position}
        )
        self.upsert(task)
        logger.info("Task created: %s (status=%s, position=%d)", task.id, status, position)
        return task

    async def update_task(self, task_id: str, **fields: Any) -> Task:
        """Apply a partial metadata update through the store.

        The returned task keeps its local status and position.
        """
        placement = _PLACEMENT_FIELDS & fields.keys()
        if placement:
            raise ValueError(f"Use the move service to change {', '.join(sorted(placement))}")
        if self._committed(task_id) is None:
            raise ValueError(f"Unknown task: {task_id}")

        task = await self.store.update_task(task_id, fields)
        # A move may have landed while the update was in flight
        current = self._committed(task_id)
        if current is not None:
            task = task.model_copy(update={"status": current.status, "position": current.position})
        self.upsert(task)
        logger.debug("Task updated: %s (%s)", task_id, ", ".join(sorted(fields)))
        return task

    def _committed(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)
