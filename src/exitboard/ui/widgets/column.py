"""Kanban column widget."""

import re

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import BoardColumn, Task
from .task_card import TaskCard


def _task_css_id(task_id: str) -> str:
    """Generate CSS-safe ID from task identifier.

    - Filesystem: "review-financials.md" -> "review-financials-md"
    - REST: UUIDs pass through lowercased
    """
    safe_id = re.sub(r"[^a-zA-Z0-9\-]", "-", task_id)
    safe_id = safe_id.strip("-").lower()
    return safe_id or "task"


class EmptyColumnMessage(Static):
    """Displayed when a column has no tasks."""


class KanbanColumn(Widget):
    """A single column in the kanban board."""

    def __init__(self, column: BoardColumn, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.column = column
        self._tasks: list[Task] = []
        self._total = 0
        self._over_limit = False

    @property
    def _css_id(self) -> str:
        return self.column.id.replace("_", "-")

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(self._header_text, classes="column-header", id=f"header-{self._css_id}")
        yield VerticalScroll(classes="column-content", id=f"content-{self._css_id}")

    @property
    def _header_text(self) -> str:
        """Header with task count and WIP limit."""
        count = f"{self._total}/{self.column.limit}" if self.column.limit else str(self._total)
        style = "red" if self._over_limit else "dim"
        swatch = f"[{self.column.color}]▌[/]" if self.column.color else ""
        return f"{swatch}{self.column.name} [{style}]({count})[/]"

    async def set_tasks(
        self,
        tasks: list[Task],
        total: int,
        over_limit: bool = False,
        selected_index: int = -1,
        dragging_id: str | None = None,
        drop_here: bool = False,
    ) -> None:
        """Render the given (possibly filtered) tasks.

        Args:
            tasks: Tasks to show, in display order
            total: Unfiltered task count for the header badge
            over_limit: Whether the column exceeds its WIP limit
            selected_index: Card under the cursor, -1 for none
            dragging_id: Task being dragged, drawn as a ghost
            drop_here: Cursor is on the column body (drop at end)
        """
        self._tasks = tasks
        self._total = total
        self._over_limit = over_limit
        self.set_class(drop_here, "-drop-target")

        content = self.query_one(f"#content-{self._css_id}", VerticalScroll)
        await content.remove_children()

        if not tasks:
            await content.mount(EmptyColumnMessage("No tasks"))
        else:
            await content.mount_all(
                TaskCard(
                    task,
                    selected=i == selected_index,
                    dragging=task.id == dragging_id,
                    id=f"task-{_task_css_id(task.id)}",
                )
                for i, task in enumerate(tasks)
            )

        self.query_one(f"#header-{self._css_id}", Static).update(self._header_text)

    @property
    def tasks(self) -> list[Task]:
        """Get the tasks in this column."""
        return self._tasks
