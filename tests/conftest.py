"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from exitboard.services import BoardService, DragController, LoggingNotifier, MoveService

from .fakes import FakeTaskStore, make_task


@pytest.fixture
def task_dir(tmp_path: Path) -> Path:
    """Create a temporary task directory."""
    task_root = tmp_path / ".tasks"
    task_root.mkdir()
    return task_root


@pytest.fixture
def store() -> FakeTaskStore:
    """Board with A, B, C in To Do and an empty In Progress column."""
    return FakeTaskStore(
        [
            make_task("A", "todo", 0, title="Review financials"),
            make_task("B", "todo", 1, title="Engage valuation firm"),
            make_task("C", "todo", 2, title="Draft teaser"),
        ]
    )


@pytest.fixture
def notifier() -> LoggingNotifier:
    return LoggingNotifier()


@pytest.fixture
def board_service(store: FakeTaskStore) -> BoardService:
    return BoardService(store)


@pytest.fixture
def move_service(
    board_service: BoardService, store: FakeTaskStore, notifier: LoggingNotifier
) -> MoveService:
    return MoveService(board_service, store, notifier)


@pytest.fixture
def drag(board_service: BoardService, move_service: MoveService) -> DragController:
    return DragController(board_service, move_service)
