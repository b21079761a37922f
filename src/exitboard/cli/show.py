"""Print the board to the terminal without starting the TUI."""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.table import Table

from ..bootstrap import build_services
from ..config import Settings
from ..models import Board, Task
from ..repositories import TaskStoreError
from ..services import FilterService, LoggingNotifier
from .output import error

PRIORITY_STYLES = {
    "critical": "bold red",
    "high": "dark_orange",
    "medium": "yellow",
    "low": "blue",
}


def _task_line(task: Task) -> str:
    style = PRIORITY_STYLES.get(task.priority, "white")
    line = f"[{style}]●[/] {task.display_title}"
    if task.checklist_total:
        line += f" [dim]{task.checklist_completed}/{task.checklist_total}[/]"
    if task.is_overdue:
        line += " [red]overdue[/]"
    if task.assignee:
        line += f" [dim]@{task.assignee}[/]"
    return line


def render_board(board: Board, query: str | None = None) -> Table:
    """Build a rich table with one column per board column.

    With a query, only columns that still have matching tasks are shown.
    """
    grouped = board.columns
    if query:
        grouped = FilterService().search(grouped, query)

    table = Table(title=board.config.name, expand=True)
    columns = [col for col in board.config.columns if col.id in grouped]
    for col in columns:
        count = board.task_count(col.id)
        header = f"{col.name} ({count}" + (f"/{col.limit}" if col.limit else "") + ")"
        style = "bold red" if board.is_over_limit(col.id) else "bold"
        table.add_column(header, header_style=style, overflow="fold")

    depth = max((len(grouped[col.id]) for col in columns), default=0)
    for row in range(depth):
        table.add_row(
            *(
                _task_line(grouped[col.id][row]) if row < len(grouped[col.id]) else ""
                for col in columns
            )
        )
    return table


async def _load(settings: Settings) -> Board:
    services = build_services(settings, LoggingNotifier())
    try:
        return await services.board_service.load()
    finally:
        await services.aclose()


def run_show(settings: Settings, query: str | None = None) -> int:
    """Load the board once and print it. Returns an exit code."""
    try:
        board = asyncio.run(_load(settings))
    except TaskStoreError as e:
        error(f"Could not load tasks: {e}")
        return 1

    Console().print(render_board(board, query))
    return 0
