"""Drag interaction layer: turns drag gestures into move requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..models import COLUMN_DROP_PREFIX, Task, group_tasks
from .board_service import BoardService
from .move_service import MoveError, MoveRequest, MoveService

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    """Drag controller states."""

    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class ColumnTarget:
    """Released over a column body rather than a card."""

    column_id: str


@dataclass(frozen=True)
class TaskTarget:
    """Released over another card."""

    task_id: str


DropTarget = ColumnTarget | TaskTarget


def parse_drop_target(over_id: str | None) -> DropTarget | None:
    """Decode a raw drop target ID ("column-<id>" or a task ID)."""
    if not over_id:
        return None
    if over_id.startswith(COLUMN_DROP_PREFIX):
        return ColumnTarget(over_id[len(COLUMN_DROP_PREFIX) :])
    return TaskTarget(over_id)


def _index_of(column: list[Task], task_id: str) -> int:
    for i, task in enumerate(column):
        if task.id == task_id:
            return i
    return -1


def resolve_intent(
    grouped: dict[str, list[Task]], task: Task, target: DropTarget
) -> MoveRequest | None:
    """
    Work out where a dropped task should go.

    ``grouped`` must be the full, unfiltered column grouping. A drop on a
    column goes to its end; a drop on a card takes that card's position.
    Returns None when the drop would leave the task where it is or the
    target is unknown.
    """
    if isinstance(target, ColumnTarget):
        column = grouped.get(target.column_id)
        if column is None:
            return None
        # End of the column, not counting the dragged task itself
        new_index = sum(1 for t in column if t.id != task.id)
        if target.column_id == task.status and _index_of(column, task.id) == new_index:
            return None
        return MoveRequest(task.id, target.column_id, new_index)

    if target.task_id == task.id:
        return None

    for status, column in grouped.items():
        over_index = _index_of(column, target.task_id)
        if over_index < 0:
            continue
        if status == task.status and _index_of(column, task.id) == over_index:
            return None
        return MoveRequest(task.id, status, column[over_index].position)

    return None


class DragController:
    """
    State machine for one pointer (or keyboard) drag.

    IDLE -> drag_start -> DRAGGING -> drag_end / drag_cancel -> IDLE

    While dragging, drag_over shows the would-be placement as a preview
    overlay on the board service; the committed task list underneath is
    never touched, so a move that commits or rolls back mid-drag is not
    overwritten. drag_end drops the overlay and issues the final move, if
    any, through the move service.
    """

    def __init__(self, board_service: BoardService, move_service: MoveService) -> None:
        self.board_service = board_service
        self.move_service = move_service
        self.state = DragState.IDLE
        self.active_id: str | None = None

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    @property
    def active_task(self) -> Task | None:
        """The dragged task, for rendering the drag overlay."""
        if self.active_id is None:
            return None
        return self.board_service.get_task(self.active_id)

    @property
    def origin_columns(self) -> dict[str, list[Task]]:
        """Committed column layout, without the drag preview.

        Drop targets are resolved against this layout, never the preview.
        """
        return group_tasks(self.board_service.snapshot(), self.board_service.config.columns)

    def drag_start(self, task_id: str) -> bool:
        """Pick up a task. Returns False if the task is unknown."""
        if self.is_dragging:
            self.drag_cancel()
        if self.board_service.get_task(task_id) is None:
            logger.debug("drag_start: unknown task %s", task_id)
            return False
        self.state = DragState.DRAGGING
        self.active_id = task_id
        logger.debug("Drag started: %s", task_id)
        return True

    def drag_over(self, over_id: str | None) -> MoveRequest | None:
        """Preview the drop at ``over_id`` and return the intent, if any."""
        if not self.is_dragging:
            return None
        intent = self._resolve(over_id)
        if intent is None:
            self.board_service.clear_preview()
        else:
            self.move_service.preview(intent)
        return intent

    async def drag_end(self, over_id: str | None) -> bool:
        """
        Drop the task.

        Returns:
            True if a move was persisted.
        """
        if not self.is_dragging:
            return False
        intent = self._resolve(over_id)
        self._reset()
        if intent is None:
            logger.debug("Drop ignored: no valid target (%s)", over_id)
            return False
        try:
            return await self.move_service.move_task(*intent)
        except MoveError as e:
            logger.warning("Drop rejected: %s", e)
            return False

    def drag_cancel(self) -> None:
        """Abort the drag and drop the preview."""
        if self.is_dragging:
            logger.debug("Drag cancelled: %s", self.active_id)
            self._reset()

    def _resolve(self, over_id: str | None) -> MoveRequest | None:
        target = parse_drop_target(over_id)
        task = next((t for t in self.board_service.snapshot() if t.id == self.active_id), None)
        if target is None or task is None:
            return None
        return resolve_intent(self.origin_columns, task, target)

    def _reset(self) -> None:
        self.board_service.clear_preview()
        self.state = DragState.IDLE
        self.active_id = None
