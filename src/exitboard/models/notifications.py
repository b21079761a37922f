"""Notification preference and do-not-disturb models."""

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

CHANNELS = ("in_app", "email", "push", "sms")

# (type, display name, description)
NOTIFICATION_TYPES: list[tuple[str, str, str]] = [
    ("task.assigned", "Task Assigned", "When someone assigns you a task"),
    ("task.completed", "Task Completed", "When a task you created is completed"),
    ("document.shared", "Document Shared", "When someone shares a document with you"),
    ("document.commented", "Document Commented", "When someone comments on your document"),
    ("ai.completed", "AI Task Completed", "When an AI agent completes a task"),
    ("milestone.achieved", "Milestone Achieved", "When a project milestone is reached"),
    ("system.alert", "System Alerts", "Important system notifications"),
    ("team.mention", "Team Mentions", "When someone mentions you"),
    ("deadline.reminder", "Deadline Reminders", "Reminders for upcoming deadlines"),
    ("market.alert", "Market Alerts", "Market condition notifications"),
]

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class NotificationPreference(BaseModel):
    """Delivery preference for one notification type."""

    type: str
    enabled: bool = True
    channels: list[str] = Field(default_factory=lambda: ["in_app"])
    settings: dict[str, Any] = Field(default_factory=dict)

    def toggle_channel(self, channel: str) -> "NotificationPreference":
        """Return a copy with ``channel`` switched on or off."""
        if channel in self.channels:
            channels = [c for c in self.channels if c != channel]
        else:
            channels = [*self.channels, channel]
        return self.model_copy(update={"channels": channels})


class DndSchedule(BaseModel):
    """A recurring do-not-disturb window."""

    id: str | None = None
    name: str = "New Schedule"
    start_time: str = "22:00"
    end_time: str = "08:00"
    days_of_week: list[int] = Field(default_factory=lambda: list(range(7)))  # 0 = Sunday
    timezone: str = "UTC"
    is_active: bool = False
    allowed_types: list[str] = Field(default_factory=lambda: ["system.alert"])

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Times are 24-hour HH:MM."""
        if not _TIME_RE.match(v):
            raise ValueError(f"Invalid time '{v}', expected HH:MM")
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, v: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("days_of_week values must be between 0 and 6")
        return sorted(set(v))
