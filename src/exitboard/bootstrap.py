"""Composition root: builds the store and services from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .api import ApiClient, IntelligenceClient, NotificationPreferencesClient
from .config import Settings
from .repositories import FilesystemTaskStore, HttpTaskStore, TaskStoreProtocol
from .services import (
    BoardService,
    ConfigService,
    DragController,
    FilterService,
    MoveService,
    Notifier,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a front end needs to drive the board."""

    config_service: ConfigService
    store: TaskStoreProtocol
    board_service: BoardService
    filter_service: FilterService
    move_service: MoveService
    drag: DragController
    api_client: ApiClient | None = None
    ml_client: ApiClient | None = None
    intelligence: IntelligenceClient | None = None
    notifications: NotificationPreferencesClient | None = None

    async def aclose(self) -> None:
        for client in (self.api_client, self.ml_client):
            if client is not None:
                await client.aclose()


def build_store(
    settings: Settings, config_service: ConfigService
) -> tuple[TaskStoreProtocol, ApiClient | None]:
    """Pick the task store named by the config's provider."""
    config = config_service.get_config()
    if config.provider == "http":
        client = ApiClient(settings.api_url, settings.api_key, timeout=settings.request_timeout)
        logger.info("Using REST task store at %s", settings.api_url)
        return HttpTaskStore(client, board_id=settings.board_id), client

    task_root = config_service.task_root
    logger.info("Using filesystem task store at %s", task_root)
    return FilesystemTaskStore(task_root), None


def build_intelligence(settings: Settings) -> tuple[IntelligenceClient | None, ApiClient | None]:
    """ML API client, built only when an API key is configured."""
    if not settings.ml_api_key:
        logger.debug("No ML API key set, intelligence features disabled")
        return None, None
    client = ApiClient(settings.ml_api_url, settings.ml_api_key, timeout=settings.request_timeout)
    logger.info("Using ML intelligence API at %s", settings.ml_api_url)
    return IntelligenceClient(client), client


def build_services(settings: Settings, notifier: Notifier) -> Services:
    config_service = ConfigService(settings.project_root)
    store, api_client = build_store(settings, config_service)
    intelligence, ml_client = build_intelligence(settings)
    board_service = BoardService(store, config_service)
    move_service = MoveService(
        board_service,
        store,
        notifier,
        rollback_on_failure=settings.rollback_on_failure,
    )
    return Services(
        config_service=config_service,
        store=store,
        board_service=board_service,
        filter_service=FilterService(),
        move_service=move_service,
        drag=DragController(board_service, move_service),
        api_client=api_client,
        ml_client=ml_client,
        intelligence=intelligence,
        # Preferences live on the same REST API as the tasks
        notifications=NotificationPreferencesClient(api_client) if api_client else None,
    )
