"""Data models."""

from .board import (
    COLUMN_DROP_PREFIX,
    Board,
    BoardColumn,
    BoardConfig,
    ExitboardConfig,
    apply_move,
    group_tasks,
    normalize_positions,
)
from .intelligence import Insight, QueryResponse, ValuationInputs, ValuationResult
from .notifications import NOTIFICATION_TYPES, DndSchedule, NotificationPreference
from .task import (
    STATE_COMPLETED,
    STATE_IN_PROGRESS,
    STATE_IN_REVIEW,
    STATE_TODO,
    Task,
)

__all__ = [
    "COLUMN_DROP_PREFIX",
    "NOTIFICATION_TYPES",
    "STATE_COMPLETED",
    "STATE_IN_PROGRESS",
    "STATE_IN_REVIEW",
    "STATE_TODO",
    "Board",
    "BoardColumn",
    "BoardConfig",
    "DndSchedule",
    "ExitboardConfig",
    "Insight",
    "NotificationPreference",
    "QueryResponse",
    "Task",
    "ValuationInputs",
    "ValuationResult",
    "apply_move",
    "group_tasks",
    "normalize_positions",
]
