"""Filesystem-based store for task files."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import frontmatter

from ..models import Task, apply_move
from ..utils import generate_filename, now_utc
from .protocol import TaskStoreError

logger = logging.getLogger(__name__)


class FilesystemTaskStore:
    """
    Store for tasks kept as markdown files.

    Each task is a ``<slug>.md`` file whose YAML front matter carries the
    status and position; the markdown body is the description. File I/O is
    blocking, so the async methods hand it to a worker thread.
    """

    def __init__(self, task_root: Path) -> None:
        """
        Initialize store.

        Args:
            task_root: Path to the tasks directory (e.g., .tasks/)
        """
        self.task_root = task_root

    def ensure_directory(self) -> None:
        """Create the tasks directory if it doesn't exist."""
        self.task_root.mkdir(parents=True, exist_ok=True)

    # --- Async API ---

    async def get_all(self) -> list[Task]:
        return await asyncio.to_thread(self._load_all)

    async def get_by_id(self, task_id: str) -> Task | None:
        return await asyncio.to_thread(self._load_one, task_id)

    async def move_task(self, task_id: str, new_status: str, new_position: int) -> None:
        await asyncio.to_thread(self._move, task_id, new_status, new_position)

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        return await asyncio.to_thread(self._update, task_id, fields)

    async def create_task(self, fields: dict[str, Any]) -> Task:
        return await asyncio.to_thread(self._create, fields)

    # --- Blocking implementation ---

    def _load_all(self) -> list[Task]:
        """Scan directory and load all task files."""
        if not self.task_root.exists():
            return []
        tasks: list[Task] = []
        for filepath in self._iter_task_files():
            task = self._parse_task_file(filepath)
            if task:
                tasks.append(task)
        return tasks

    def _load_one(self, task_id: str) -> Task | None:
        filepath = self.task_root / task_id
        if not filepath.exists():
            return None
        return self._parse_task_file(filepath)

    def _move(self, task_id: str, new_status: str, new_position: int) -> None:
        tasks = self._load_all()
        try:
            moved = apply_move(tasks, task_id, new_status, new_position)
        except ValueError as e:
            raise TaskStoreError(str(e)) from e

        before = {t.id: (t.status, t.position) for t in tasks}
        written = 0
        for task in moved:
            if task.id == task_id:
                task = task.model_copy(update={"updated": now_utc()})
            elif before[task.id] == (task.status, task.position):
                continue
            self._write(task)
            written += 1
        logger.debug("Move of %s rewrote %d file(s)", task_id, written)

    def _update(self, task_id: str, fields: dict[str, Any]) -> Task:
        task = self._load_one(task_id)
        if task is None:
            raise TaskStoreError(f"Unknown task: {task_id}")
        data = {**task.model_dump(), **fields, "id": task_id, "updated": now_utc()}
        updated = Task.model_validate(data)
        self._write(updated)
        return updated

    def _create(self, fields: dict[str, Any]) -> Task:
        self.ensure_directory()
        title = fields.get("title") or "Untitled"
        taken = {p.name for p in self._iter_task_files()}
        now = now_utc()
        task = Task.model_validate(
            {**fields, "id": generate_filename(title, taken), "created": now, "updated": now}
        )
        self._write(task)
        return task

    def _write(self, task: Task) -> None:
        """Write a task file, front matter first."""
        self.ensure_directory()
        post = frontmatter.Post(task.description or "")
        post.metadata = task.to_frontmatter()
        filepath = self.task_root / task.id
        try:
            with filepath.open("w") as f:
                f.write(frontmatter.dumps(post, sort_keys=False))
        except OSError as e:
            raise TaskStoreError(f"Cannot write {filepath}: {e}") from e

    def _iter_task_files(self) -> Iterator[Path]:
        """Iterate over all .md files in the task root."""
        if self.task_root.exists():
            yield from sorted(self.task_root.glob("*.md"))

    def _parse_task_file(self, filepath: Path) -> Task | None:
        """Parse a single task file, skipping files that cannot be read."""
        try:
            post = frontmatter.load(filepath)
            return Task.from_frontmatter(
                task_id=filepath.name,
                metadata=post.metadata,
                body=post.content,
            )
        except Exception as e:
            logger.warning("Skipping unreadable task file %s: %s", filepath.name, e)
            return None
