"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .search_bar import SearchBar, search_summary
from .task_card import TaskCard

__all__ = [
    "EmptyColumnMessage",
    "KanbanColumn",
    "SearchBar",
    "TaskCard",
    "search_summary",
]
