"""Task domain model."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from ..utils import now_utc

# Status constants for the default columns
STATE_TODO = "todo"
STATE_IN_PROGRESS = "in_progress"
STATE_IN_REVIEW = "in_review"
STATE_COMPLETED = "completed"


class Task(BaseModel):
    """A single card on the board.

    ``status`` names the column the task lives in and ``position`` orders it
    within that column. Everything else is display metadata.
    """

    # Task identification
    id: str  # e.g., "review-financials.md" (filesystem), a UUID (REST backend)
    board_id: str | None = None

    # Placement
    status: str = STATE_TODO  # Column ID, custom columns allowed
    position: int = 0  # Ascending within a status group, need not be contiguous

    # Metadata
    title: str = ""
    description: str | None = None
    priority: str = "medium"
    assignee: str | None = None
    tags: list[str] = Field(default_factory=list)
    due_date: datetime | None = None
    completed_at: datetime | None = None
    checklist_completed: int = 0
    checklist_total: int = 0
    attachments: int = 0
    comments: int = 0
    progress: int = Field(default=0, ge=0, le=100)
    is_blocked: bool = False
    is_milestone: bool = False
    created: datetime | None = None
    updated: datetime | None = None

    @property
    def display_title(self) -> str:
        """Title for display - uses ID if title not set."""
        if self.title:
            return self.title
        display = self.id
        if display.endswith(".md"):
            display = display[:-3]
        return display.replace("-", " ").title()

    @property
    def sort_key(self) -> tuple[int, str]:
        """Ordering key within a column; the ID breaks position ties."""
        return (self.position, self.id)

    @property
    def is_overdue(self) -> bool:
        """True when the due date has passed and the task is not completed."""
        if self.due_date is None or self.completed_at is not None:
            return False
        due = self.due_date
        now = now_utc()
        if due.tzinfo is None:
            now = now.replace(tzinfo=None)
        return due < now

    @property
    def checklist_progress(self) -> int:
        """Checklist completion as a percentage (0 when there is no checklist)."""
        if self.checklist_total <= 0:
            return 0
        return round(self.checklist_completed / self.checklist_total * 100)

    def to_frontmatter(self) -> dict[str, Any]:
        """Convert to dict suitable for YAML front matter."""
        data: dict[str, Any] = {}
        if self.title:
            data["title"] = self.title
        data["status"] = self.status
        data["position"] = self.position
        data["priority"] = self.priority
        if self.board_id:
            data["board_id"] = self.board_id
        if self.assignee:
            data["assignee"] = self.assignee
        if self.tags:
            data["tags"] = self.tags
        if self.due_date:
            data["due_date"] = self.due_date.isoformat()
        if self.completed_at:
            data["completed_at"] = self.completed_at.isoformat()
        if self.checklist_total:
            data["checklist_completed"] = self.checklist_completed
            data["checklist_total"] = self.checklist_total
        if self.progress:
            data["progress"] = self.progress
        if self.is_blocked:
            data["is_blocked"] = True
        if self.is_milestone:
            data["is_milestone"] = True
        if self.created:
            data["created"] = self.created.isoformat()
        if self.updated:
            data["updated"] = self.updated.isoformat()
        return data

    @classmethod
    def from_frontmatter(cls, task_id: str, metadata: dict, body: str) -> "Task":
        """Create Task from parsed front matter; the body is the description."""
        return cls(
            id=task_id,
            board_id=metadata.get("board_id"),
            title=metadata.get("title") or "",
            description=body.strip() or None,
            status=metadata.get("status", STATE_TODO),
            position=int(metadata.get("position", 0)),
            priority=metadata.get("priority", "medium"),
            assignee=metadata.get("assignee"),
            tags=metadata.get("tags") or [],
            due_date=_parse_datetime(metadata.get("due_date")),
            completed_at=_parse_datetime(metadata.get("completed_at")),
            checklist_completed=metadata.get("checklist_completed", 0),
            checklist_total=metadata.get("checklist_total", 0),
            progress=metadata.get("progress", 0),
            is_blocked=bool(metadata.get("is_blocked", False)),
            is_milestone=bool(metadata.get("is_milestone", False)),
            created=_parse_datetime(metadata.get("created")),
            updated=_parse_datetime(metadata.get("updated")),
        )

    def to_api(self) -> dict[str, Any]:
        """JSON-ready payload for the REST backend."""
        return self.model_dump(mode="json", exclude_none=True)


def _parse_datetime(value: str | date | None) -> datetime | None:
    """Parse datetime from string or pass through."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        # Bare YAML dates load as date objects
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
