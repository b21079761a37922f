"""In-memory doubles for the store and notifier."""

from __future__ import annotations

import asyncio
from typing import Any

from exitboard.models import Task, apply_move
from exitboard.repositories import TaskStoreError


def make_task(task_id: str, status: str = "todo", position: int = 0, **fields: Any) -> Task:
    return Task(id=task_id, status=status, position=position, **fields)


class FakeTaskStore:
    """Store that keeps tasks in a dict and records every move call.

    Set ``fail_moves`` to make move_task raise. ``gate`` can hold a move in
    flight until the test sets it.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: dict[str, Task] = {t.id: t for t in tasks or []}
        self.move_calls: list[tuple[str, str, int]] = []
        self.created: list[dict[str, Any]] = []
        self.fail_moves = False
        self.fail_load = False
        self.gate: asyncio.Event | None = None

    async def get_all(self) -> list[Task]:
        if self.fail_load:
            raise TaskStoreError("backend unavailable")
        return list(self.tasks.values())

    async def get_by_id(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    async def move_task(self, task_id: str, new_status: str, new_position: int) -> None:
        self.move_calls.append((task_id, new_status, new_position))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_moves:
            raise TaskStoreError("network down")
        moved = apply_move(list(self.tasks.values()), task_id, new_status, new_position)
        self.tasks = {t.id: t for t in moved}

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        if task_id not in self.tasks:
            raise TaskStoreError(f"Unknown task: {task_id}")
        task = self.tasks[task_id].model_copy(update=fields)
        self.tasks[task_id] = task
        return task

    async def create_task(self, fields: dict[str, Any]) -> Task:
        self.created.append(fields)
        task = Task(id=f"task-{len(self.created)}", **fields)
        self.tasks[task.id] = task
        return task
