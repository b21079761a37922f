"""Move resolver and persistence bridge."""

from __future__ import annotations

import logging
from typing import NamedTuple

from ..models import Task, apply_move, group_tasks
from ..repositories import TaskStoreProtocol
from .board_service import BoardService
from .notifier import Notifier

logger = logging.getLogger(__name__)

MOVE_ERROR_TITLE = "Error moving task"
MOVE_ERROR_MESSAGE = "Failed to update task position. Please try again."


class MoveError(ValueError):
    """A move request that can never succeed (unknown task, column or bad position)."""


class MoveRequest(NamedTuple):
    """A resolved drag intent: where a task should end up."""

    task_id: str
    new_status: str
    new_position: int


class MoveService:
    """Applies moves to the board and pushes them to the store.

    Moves are optimistic: the board changes first, then the store call is
    awaited. A failed store call is reported through the notifier and, when
    ``rollback_on_failure`` is set, the board goes back to how it was before
    the move. No retries; concurrent moves are neither queued nor cancelled.
    """

    def __init__(
        self,
        board_service: BoardService,
        store: TaskStoreProtocol,
        notifier: Notifier,
        rollback_on_failure: bool = True,
    ) -> None:
        self.board_service = board_service
        self.store = store
        self.notifier = notifier
        self.rollback_on_failure = rollback_on_failure

    def validate(self, request: MoveRequest) -> None:
        """Raise MoveError unless the request names a real task, column and position."""
        if self.board_service.get_task(request.task_id) is None:
            raise MoveError(f"Unknown task: {request.task_id}")
        if not self.board_service.config.is_valid_status(request.new_status):
            raise MoveError(f"Unknown column: {request.new_status}")
        if request.new_position < 0:
            raise MoveError(f"Position must be >= 0, got {request.new_position}")

    def is_noop(self, request: MoveRequest) -> bool:
        """True when the move would leave the task where it already is.

        Compares column indices, clamping the request the same way
        apply_move does.
        """
        tasks = self.board_service.snapshot()
        task = next((t for t in tasks if t.id == request.task_id), None)
        if task is None or task.status != request.new_status:
            return False
        column = group_tasks(tasks, self.board_service.config.columns).get(task.status, [])
        current = next(i for i, t in enumerate(column) if t.id == task.id)
        return current == min(request.new_position, len(column) - 1)

    def preview(self, request: MoveRequest) -> None:
        """Show a move on the board without committing or persisting it."""
        self.validate(request)
        self.board_service.show_preview(apply_move(self.board_service.snapshot(), *request))
        logger.debug("Provisional move: %s -> %s@%d", *request)

    async def move_task(self, task_id: str, new_status: str, new_position: int) -> bool:
        """
        Move a task and persist it.

        Returns:
            True if the store accepted the move, False if it was a no-op or
            the store call failed.

        Raises:
            MoveError: the request is invalid; nothing was changed.
        """
        request = MoveRequest(task_id, new_status, new_position)
        self.validate(request)

        if self.is_noop(request):
            logger.debug("Move skipped, task unchanged: %s", task_id)
            return False

        before = self.board_service.snapshot()
        old = next(t for t in before if t.id == task_id)
        after = apply_move(before, *request)
        self.board_service.replace_tasks(after)

        try:
            await self.store.move_task(task_id, new_status, new_position)
        except Exception as e:
            logger.warning("Move of %s failed: %s", task_id, e, exc_info=True)
            if self.rollback_on_failure:
                self._revert(before, after)
            self.notifier.notify(MOVE_ERROR_MESSAGE, title=MOVE_ERROR_TITLE, severity="error")
            return False

        logger.info(
            "Task moved: %s (%s@%d -> %s@%d)",
            task_id,
            old.status,
            old.position,
            new_status,
            new_position,
        )
        return True

    def _revert(self, before: list[Task], after: list[Task]) -> None:
        """Undo a failed move.

        Only tasks still holding the placement this move gave them are put
        back; anything changed since (by another move that finished in the
        meantime) is left alone.
        """
        originals = {t.id: t for t in before}
        ours = {id(t) for t, prev in zip(after, before, strict=True) if t is not prev}
        reverted = 0
        tasks = []
        for task in self.board_service.snapshot():
            if id(task) in ours:
                tasks.append(originals[task.id])
                reverted += 1
            else:
                tasks.append(task)
        self.board_service.replace_tasks(tasks)
        logger.info("Rolled back %d task(s) after failed move", reverted)
