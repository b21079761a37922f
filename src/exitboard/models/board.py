"""Board configuration and grouped board state models."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from .task import STATE_COMPLETED, STATE_IN_PROGRESS, STATE_IN_REVIEW, STATE_TODO, Task

COLUMN_DROP_PREFIX = "column-"


def _validate_identifier(value: str, name: str = "ID") -> str:
    """Validate an identifier is lowercase alphanumeric with underscores."""
    if not value:
        raise ValueError(f"{name} cannot be empty")
    if not value[0].isalpha():
        raise ValueError(f"{name} must start with a letter")
    if not all(c.isalnum() or c == "_" for c in value):
        raise ValueError(f"{name} must be alphanumeric with underscores only")
    if value != value.lower():
        raise ValueError(f"{name} must be lowercase")
    return value


def _validate_color(v: str) -> str:
    """Validate color is a valid named color or hex code."""
    if v.startswith("#"):
        hex_part = v[1:]
        if len(hex_part) not in (3, 6):
            raise ValueError("Hex color must be 3 or 6 characters (e.g., #fff or #ffffff)")
        if not all(c in "0123456789abcdefABCDEF" for c in hex_part):
            raise ValueError("Invalid hex color code")
    return v


class BoardColumn(BaseModel):
    """Configuration for a single board column."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    limit: int | None = Field(default=None, ge=1, description="WIP cap")
    color: str | None = Field(default=None, description="Named color or hex code")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate column ID is lowercase with underscores only."""
        return _validate_identifier(v, "Column ID")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        """Validate color is a valid named color or hex code."""
        if v is None:
            return v
        return _validate_color(v)

    @property
    def drop_id(self) -> str:
        """Drop target ID the drag layer uses for this column."""
        return f"{COLUMN_DROP_PREFIX}{self.id}"


class BoardConfig(BaseModel):
    """Board name and ordered column definitions."""

    name: str = "Exit Plan"
    description: str | None = None
    columns: list[BoardColumn] = Field(..., min_length=1, max_length=12)

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[BoardColumn]) -> list[BoardColumn]:
        """Validate column constraints."""
        ids = [col.id for col in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Column IDs must be unique")
        return v

    @property
    def column_ids(self) -> list[str]:
        """List of column IDs in display order."""
        return [col.id for col in self.columns]

    def get_column(self, column_id: str) -> BoardColumn | None:
        """Get column config by ID."""
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def get_name(self, column_id: str) -> str:
        """Get display name for a column ID."""
        col = self.get_column(column_id)
        if col is not None:
            return col.name
        return column_id.replace("_", " ").title()

    def is_valid_status(self, status: str) -> bool:
        """Check if status names a configured column."""
        return status in self.column_ids

    @classmethod
    def default(cls) -> BoardConfig:
        """Return the default four-column exit-planning board."""
        return cls(
            columns=[
                BoardColumn(id=STATE_TODO, name="To Do", color="#94a3b8"),
                BoardColumn(id=STATE_IN_PROGRESS, name="In Progress", limit=5, color="#3b82f6"),
                BoardColumn(id=STATE_IN_REVIEW, name="In Review", limit=3, color="#f59e0b"),
                BoardColumn(id=STATE_COMPLETED, name="Completed", color="#22c55e"),
            ],
        )


class ExitboardConfig(BaseModel):
    """Root configuration from exitboard.yml."""

    version: int = 1
    provider: str = Field(default="file", description="Task store: file or http")
    task_root: str = Field(default=".tasks", description="Relative path to tasks directory")
    board: BoardConfig = Field(default_factory=BoardConfig.default)

    VALID_PROVIDERS: ClassVar[tuple[str, ...]] = ("file", "http")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate provider is a supported value."""
        if v not in cls.VALID_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{v}'. Must be one of: {', '.join(cls.VALID_PROVIDERS)}"
            )
        return v

    @field_validator("task_root")
    @classmethod
    def validate_task_root(cls, v: str) -> str:
        """Validate task_root is a relative path."""
        if Path(v).is_absolute():
            raise ValueError("task_root must be a relative path")
        if ".." in Path(v).parts:
            raise ValueError("task_root must be within the project directory")
        return v

    @classmethod
    def default(cls) -> ExitboardConfig:
        """Return default configuration."""
        return cls(provider="file", board=BoardConfig.default())


def group_tasks(tasks: Iterable[Task], columns: Iterable[BoardColumn]) -> dict[str, list[Task]]:
    """Group tasks into their columns, each sorted by position.

    Keys follow column display order. Tasks whose status matches no column
    are left out of every group.
    """
    grouped: dict[str, list[Task]] = {col.id: [] for col in columns}
    for task in tasks:
        if task.status in grouped:
            grouped[task.status].append(task)
    for column_tasks in grouped.values():
        column_tasks.sort(key=lambda t: t.sort_key)
    return grouped


def normalize_positions(tasks: list[Task], columns: Iterable[BoardColumn]) -> list[Task]:
    """Renumber every column 0..n-1, keeping its order.

    Tasks already at their index, and tasks in no column, are returned as
    the same objects.
    """
    replaced: dict[str, Task] = {}
    for column_tasks in group_tasks(tasks, columns).values():
        for pos, task in enumerate(column_tasks):
            if task.position != pos:
                replaced[task.id] = task.model_copy(update={"position": pos})
    return [replaced.get(t.id, t) for t in tasks]


def apply_move(tasks: list[Task], task_id: str, new_status: str, new_position: int) -> list[Task]:
    """Return a new task list with ``task_id`` placed at ``new_position`` of ``new_status``.

    ``new_position`` is an index into the target column as it looks without
    the moving task, clamped to its length. The target column, and the source
    column on a cross-column move, are renumbered 0..n-1. Tasks whose
    placement did not change are returned as the same objects.
    """
    if new_position < 0:
        raise ValueError(f"Position must be >= 0, got {new_position}")
    moving = next((t for t in tasks if t.id == task_id), None)
    if moving is None:
        raise ValueError(f"Unknown task: {task_id}")

    def column(status: str) -> list[Task]:
        return sorted(
            (t for t in tasks if t.status == status and t.id != task_id),
            key=lambda t: t.sort_key,
        )

    target = column(new_status)
    index = min(new_position, len(target))
    target.insert(index, moving.model_copy(update={"status": new_status}))

    replaced: dict[str, Task] = {}
    columns = [target] if new_status == moving.status else [target, column(moving.status)]
    for col in columns:
        for pos, task in enumerate(col):
            if task.id == task_id or task.position != pos:
                replaced[task.id] = task.model_copy(update={"position": pos})

    return [replaced.get(t.id, t) for t in tasks]


class Board(BaseModel):
    """Full board state with tasks grouped by column."""

    columns: dict[str, list[Task]] = Field(default_factory=dict)
    orphaned: list[Task] = Field(default_factory=list)

    _config: BoardConfig | None = PrivateAttr(default=None)

    @classmethod
    def from_tasks(cls, tasks: list[Task], config: BoardConfig | None = None) -> Board:
        """
        Create Board from tasks, grouping by status.

        Args:
            tasks: Flat task list
            config: Board configuration for column definitions.
                    If None, uses the default board.
        """
        if config is None:
            config = BoardConfig.default()

        board = cls(
            columns=group_tasks(tasks, config.columns),
            orphaned=[t for t in tasks if not config.is_valid_status(t.status)],
        )
        board._config = config
        return board

    @property
    def config(self) -> BoardConfig:
        return self._config or BoardConfig.default()

    def get_column(self, column_id: str) -> list[Task]:
        """Get tasks for a specific column."""
        return self.columns.get(column_id, [])

    def task_count(self, column_id: str) -> int:
        return len(self.get_column(column_id))

    def is_over_limit(self, column_id: str) -> bool:
        """True when the column holds more tasks than its WIP limit."""
        col = self.config.get_column(column_id)
        if col is None or col.limit is None:
            return False
        return self.task_count(column_id) > col.limit

    def get_visible_columns(self) -> list[tuple[BoardColumn, list[Task]]]:
        """
        Get columns with their tasks.

        Returns:
            List of (column, tasks) tuples in display order.
        """
        return [(col, self.get_column(col.id)) for col in self.config.columns]
