"""Task card widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task

PRIORITY_DISPLAY: dict[str, tuple[str, str]] = {
    "critical": ("red", "⚑"),
    "high": ("orange1", "!"),
    "medium": ("yellow", "●"),
    "low": ("blue", "○"),
}


class TaskCard(Widget):
    """A task card displayed in a column."""

    def __init__(
        self,
        task_data: Task,
        selected: bool = False,
        dragging: bool = False,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data
        self.set_class(selected, "-selected")
        self.set_class(dragging, "-dragging")
        self.set_class(task_data.is_blocked, "-blocked")
        self.set_class(task_data.is_milestone, "-milestone")

    @property
    def task_data(self) -> Task:
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        yield Static(self._truncate(self._task_data.display_title, 40), classes="task-title")
        yield Static(self._format_meta(), classes="task-meta")

        if self._task_data.tags:
            yield Static(self._format_tags(), classes="task-tags")

        if self._task_data.assignee:
            yield Static(f"@{self._task_data.assignee}", classes="task-assignee")

    def _format_meta(self) -> str:
        """Priority, checklist and due-date line."""
        color, symbol = PRIORITY_DISPLAY.get(self._task_data.priority, ("white", "●"))
        parts = [f"[{color}]{symbol}[/] {self._task_data.priority}"]
        if self._task_data.checklist_total:
            parts.append(
                f"☑ {self._task_data.checklist_completed}/{self._task_data.checklist_total}"
            )
        if self._task_data.due_date:
            due = self._task_data.due_date.strftime("%b %d")
            parts.append(f"[red]{due}[/]" if self._task_data.is_overdue else f"[dim]{due}[/]")
        return "  ".join(parts)

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _format_tags(self) -> str:
        """Format tags for display as chips."""
        max_tags = 3
        tags = self._task_data.tags[:max_tags]
        formatted = " ".join(f"[dim]#{tag}[/]" for tag in tags)

        if len(self._task_data.tags) > max_tags:
            extra = len(self._task_data.tags) - max_tags
            formatted += f" [dim]+{extra}[/]"

        return formatted
