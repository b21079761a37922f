"""Service layer for board logic."""

from .board_service import BoardService
from .config_service import ConfigService
from .drag_service import (
    ColumnTarget,
    DragController,
    DragState,
    TaskTarget,
    parse_drop_target,
    resolve_intent,
)
from .filter_service import Filter, FilterService
from .move_service import MoveError, MoveRequest, MoveService
from .notifier import LoggingNotifier, Notifier

__all__ = [
    "BoardService",
    "ColumnTarget",
    "ConfigService",
    "DragController",
    "DragState",
    "Filter",
    "FilterService",
    "LoggingNotifier",
    "MoveError",
    "MoveRequest",
    "MoveService",
    "Notifier",
    "TaskTarget",
    "parse_drop_target",
    "resolve_intent",
]
