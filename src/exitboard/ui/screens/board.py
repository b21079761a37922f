"""Main kanban board screen."""

import logging

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header

from ...models import BoardConfig, Task
from ...repositories import TaskStoreError
from ...services import Filter
from ..widgets.column import KanbanColumn
from ..widgets.search_bar import SearchBar, search_summary

logger = logging.getLogger(__name__)


class BoardScreen(Screen):
    """Main kanban board screen with navigation and keyboard drag.

    Outside a drag the cursor selects a card. During a drag the cursor
    selects a drop slot instead: a card of the column as it was when the
    drag started, or the column body (drop at the end). Each cursor move
    previews the drop; enter commits it and escape cancels.
    """

    # Layers for z-ordering (later = higher)
    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        self._drop_column = 0
        self._drop_slot = 0
        self._filter: Filter | None = None
        self._expression = ""
        self._visible: list[str] = []
        self._grouped: dict[str, list[Task]] = {}

    @property
    def services(self):
        return self.app.services  # pyrefly: ignore[missing-attribute]

    @property
    def board_config(self) -> BoardConfig:
        return self.services.board_service.config

    @property
    def drag(self):
        return self.services.drag

    def compose(self) -> ComposeResult:
        """Create the board layout with dynamic columns from config."""
        yield Header()

        with Container(id="board-container"), Horizontal(id="columns"):
            for col in self.board_config.columns:
                yield KanbanColumn(col, id=self._widget_id(col.id))

        yield SearchBar()
        yield Footer()

    async def on_mount(self) -> None:
        """Load tasks when screen mounts."""
        self.sub_title = self.board_config.name
        await self.load_board()

    @staticmethod
    def _widget_id(column_id: str) -> str:
        return f"column-{column_id.replace('_', '-')}"

    def _get_column(self, column_id: str) -> KanbanColumn | None:
        try:
            return self.query_one(f"#{self._widget_id(column_id)}", KanbanColumn)
        except NoMatches:
            return None

    async def load_board(self, focus_task_id: str | None = None) -> None:
        """Reload tasks from the store and redraw."""
        self.drag.drag_cancel()
        try:
            await self.services.board_service.load()
        except TaskStoreError as e:
            logger.error("Failed to load tasks: %s", e)
            self.app.notify(str(e), title="Could not load tasks", severity="error")
        await self.render_board(focus_task_id)

    async def render_board(self, focus_task_id: str | None = None) -> None:
        """Redraw every column from the board service's current state.

        Args:
            focus_task_id: If provided, move the cursor to this task.
        """
        board = self.services.board_service.board
        grouped = board.columns
        if self._filter is not None:
            grouped = self.services.filter_service.filter_columns(grouped, self._filter)
        self._grouped = grouped
        # Empty columns are only hidden while a search is active
        self._visible = [col.id for col in board.config.columns if col.id in grouped]

        if focus_task_id is not None:
            self._focus_task(focus_task_id)
        self._clamp_cursor()

        dragging_id = self.drag.active_id
        drop_column = self._drop_column_id() if self.drag.is_dragging else None
        drop_on_body = self.drag.is_dragging and self._over_id() == self._column_drop_id()

        for col in board.config.columns:
            widget = self._get_column(col.id)
            if widget is None:
                continue
            widget.display = col.id in grouped
            if col.id not in grouped:
                continue
            selected = -1
            if not self.drag.is_dragging and self.current_column_state == col.id:
                selected = self._current_task
            await widget.set_tasks(
                grouped[col.id],
                total=board.task_count(col.id),
                over_limit=board.is_over_limit(col.id),
                selected_index=selected,
                dragging_id=dragging_id,
                drop_here=drop_on_body and drop_column == col.id,
            )

        summary = None
        if self._filter is not None:
            summary = search_summary(
                self._expression,
                matched=sum(len(tasks) for tasks in grouped.values()),
                total=sum(len(tasks) for tasks in board.columns.values()),
                hidden_columns=len(board.config.columns) - len(self._visible),
            )
        self.query_one(SearchBar).show_summary(summary)

    def _focus_task(self, task_id: str) -> None:
        for col_idx, column_id in enumerate(self._visible):
            for task_idx, task in enumerate(self._grouped[column_id]):
                if task.id == task_id:
                    self._current_column, self._current_task = col_idx, task_idx
                    return

    def _clamp_cursor(self) -> None:
        if not self._visible:
            self._current_column = self._current_task = 0
            return
        self._current_column = max(0, min(self._current_column, len(self._visible) - 1))
        count = len(self._grouped[self._visible[self._current_column]])
        self._current_task = max(0, min(self._current_task, count - 1)) if count else 0

    def set_filter(self, filter_: Filter | None, expression: str = "") -> None:
        """Set the active filter."""
        self._filter = filter_ if filter_ is not None and not filter_.is_empty else None
        self._expression = expression.strip() if self._filter is not None else ""

    # Cursor

    async def navigate_column(self, delta: int) -> None:
        """Move the cursor (or the drop slot while dragging) between columns."""
        if self.drag.is_dragging:
            self._drop_column = max(0, min(self._drop_column + delta, len(self._visible) - 1))
            self._drop_slot = min(self._drop_slot, len(self._drop_slots()))
            await self._preview()
            return

        new_column = max(0, min(self._current_column + delta, len(self._visible) - 1))
        if new_column != self._current_column:
            self._current_column = new_column
            await self.render_board()

    async def navigate_task(self, delta: int) -> None:
        """Move the cursor (or the drop slot while dragging) within a column."""
        if self.drag.is_dragging:
            self._drop_slot = max(0, min(self._drop_slot + delta, len(self._drop_slots())))
            await self._preview()
            return

        new_task = self._current_task + delta
        if 0 <= new_task < len(self._current_tasks()):
            self._current_task = new_task
            await self.render_board()

    def _current_tasks(self) -> list[Task]:
        if not self._visible:
            return []
        return self._grouped[self._visible[self._current_column]]

    def get_current_task(self) -> Task | None:
        """Get the task under the cursor."""
        tasks = self._current_tasks()
        if 0 <= self._current_task < len(tasks):
            return tasks[self._current_task]
        return None

    @property
    def current_column_state(self) -> str:
        """Column ID under the cursor."""
        if 0 <= self._current_column < len(self._visible):
            return self._visible[self._current_column]
        return self.board_config.columns[0].id

    # Drag

    def _drop_column_id(self) -> str:
        # The preview can hide or reveal columns while a search is active
        self._drop_column = min(self._drop_column, len(self._visible) - 1)
        return self._visible[self._drop_column]

    def _column_drop_id(self) -> str:
        col = self.board_config.get_column(self._drop_column_id())
        return col.drop_id if col else ""

    def _drop_slots(self) -> list[Task]:
        """Cards of the hovered column as laid out before the drag."""
        tasks = self.drag.origin_columns.get(self._drop_column_id(), [])
        if self._filter is not None:
            tasks = self.services.filter_service.apply(tasks, self._filter)
        return tasks

    def _over_id(self) -> str | None:
        """Drop target ID under the cursor: a task ID or a column drop ID."""
        if not self._visible:
            return None
        slots = self._drop_slots()
        if self._drop_slot < len(slots):
            return slots[self._drop_slot].id
        return self._column_drop_id()

    async def start_drag(self) -> None:
        task = self.get_current_task()
        if task is None or not self.drag.drag_start(task.id):
            return
        self._drop_column = self._current_column
        self._drop_slot = self._current_task
        await self.render_board()

    async def _preview(self) -> None:
        self.drag.drag_over(self._over_id())
        await self.render_board()

    async def drop(self) -> None:
        """Commit the drag at the current drop slot."""
        if not self.drag.is_dragging:
            return
        task_id = self.drag.active_id
        moved = await self.drag.drag_end(self._over_id())
        await self.render_board(focus_task_id=task_id)
        if moved:
            task = self.services.board_service.get_task(task_id)
            if task is not None:
                column = self.board_config.get_name(task.status)
                self.app.notify(f"Moved to {column}", timeout=2)

    async def cancel_drag(self) -> bool:
        """Cancel a drag in progress. Returns False if there was none."""
        if not self.drag.is_dragging:
            return False
        task_id = self.drag.active_id
        self.drag.drag_cancel()
        await self.render_board(focus_task_id=task_id)
        return True

