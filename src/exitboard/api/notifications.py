"""Client for the notification preferences and do-not-disturb endpoints."""

from __future__ import annotations

import logging

from ..models.notifications import DndSchedule, NotificationPreference
from .client import ApiClient, parse_response

logger = logging.getLogger(__name__)


class NotificationPreferencesClient:
    """CRUD wrapper over ``/api/notifications/preferences`` and ``/api/notifications/dnd``."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_preferences(self) -> dict[str, NotificationPreference]:
        """Load preferences keyed by notification type."""
        data = await self._client.get("/api/notifications/preferences")
        prefs = parse_response((data or {}).get("preferences", []), list[NotificationPreference])
        return {p.type: p for p in prefs}

    async def save_preferences(self, preferences: dict[str, NotificationPreference]) -> None:
        """Save all preferences in one bulk request."""
        payload = [
            pref.model_copy(update={"type": notification_type}).model_dump(mode="json")
            for notification_type, pref in preferences.items()
        ]
        await self._client.post(
            "/api/notifications/preferences/bulk", json={"preferences": payload}
        )
        logger.info("Saved %d notification preferences", len(payload))

    async def get_dnd_schedules(self) -> list[DndSchedule]:
        data = await self._client.get("/api/notifications/dnd")
        return parse_response((data or {}).get("schedules", []), list[DndSchedule])

    async def save_dnd_schedule(self, schedule: DndSchedule) -> DndSchedule:
        """Create a schedule, or update it when it already has an ID."""
        payload = schedule.model_dump(mode="json", exclude_none=True)
        if schedule.id:
            data = await self._client.request(
                "PUT", f"/api/notifications/dnd/{schedule.id}", json=payload
            )
        else:
            data = await self._client.post("/api/notifications/dnd", json=payload)
        if not data:
            return schedule
        return parse_response(data.get("schedule", data), DndSchedule)

    async def delete_dnd_schedule(self, schedule_id: str) -> None:
        await self._client.delete(f"/api/notifications/dnd/{schedule_id}")
        logger.info("Deleted DND schedule %s", schedule_id)


def preference_for(
    preferences: dict[str, NotificationPreference], notification_type: str
) -> NotificationPreference | None:
    """Look up the preference for a type; None means render nothing for it."""
    return preferences.get(notification_type)
