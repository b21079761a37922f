"""Tests for app action handlers.

These check the notifications and screen calls the key bindings produce,
without starting a Textual event loop.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from exitboard.app import ExitboardApp
from exitboard.repositories import TaskStoreError
from exitboard.ui.widgets import SearchBar

from .fakes import make_task


def make_app(dragging: bool = False) -> tuple[ExitboardApp, MagicMock]:
    app = ExitboardApp.__new__(ExitboardApp)
    app.notify = MagicMock()
    app.services = MagicMock()
    app.services.drag.is_dragging = dragging
    app.services.board_service.create_task = AsyncMock()

    screen = MagicMock()
    screen.current_column_state = "in_progress"
    for name in ("render_board", "start_drag", "drop", "cancel_drag", "navigate_task"):
        setattr(screen, name, AsyncMock())
    return app, screen


class TestNewTaskAction:
    """Tests for the new task action."""

    @pytest.mark.asyncio
    async def test_creates_in_current_column(self):
        app, screen = make_app()
        app.services.board_service.create_task.return_value = make_task("new-task.md")

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_new_task()

        app.services.board_service.create_task.assert_awaited_once_with(
            "New Task", status="in_progress"
        )
        screen.render_board.assert_awaited_once_with(focus_task_id="new-task.md")
        app.notify.assert_called_once_with("Task created", timeout=2)

    @pytest.mark.asyncio
    async def test_store_failure_notifies(self):
        app, screen = make_app()
        app.services.board_service.create_task.side_effect = TaskStoreError("disk full")

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_new_task()

        app.notify.assert_called_once_with(
            "disk full", title="Could not create task", severity="error"
        )
        screen.render_board.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ignored_while_dragging(self):
        app, screen = make_app(dragging=True)

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_new_task()

        app.services.board_service.create_task.assert_not_awaited()


class TestDragActions:
    """Tests for the keyboard drag bindings."""

    @pytest.mark.asyncio
    async def test_grab_starts_drag(self):
        app, screen = make_app()
        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_grab()
        screen.start_drag.assert_awaited_once()
        screen.drop.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_grab_while_dragging_drops(self):
        app, screen = make_app(dragging=True)
        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_grab()
        screen.drop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_escape_cancels_drag_first(self):
        app, screen = make_app(dragging=True)
        screen.cancel_drag.return_value = True
        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_escape()
        screen.query_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_escape_clears_active_search(self):
        app, screen = make_app()
        screen.cancel_drag.return_value = False
        search_bar = MagicMock(spec=SearchBar)
        search_bar.editing = False
        search_bar.expression = "tag:legal"
        screen.query_one.return_value = search_bar

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_escape()

        search_bar.clear.assert_called_once()
        screen.set_filter.assert_called_once_with(None, "")
        screen.render_board.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_escape_closes_open_input_first(self):
        app, screen = make_app()
        screen.cancel_drag.return_value = False
        search_bar = MagicMock(spec=SearchBar)
        search_bar.editing = True
        search_bar.expression = "tag:legal"
        screen.query_one.return_value = search_bar

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_escape()

        search_bar.close.assert_called_once()
        search_bar.clear.assert_not_called()
        screen.set_filter.assert_not_called()

    @pytest.mark.asyncio
    async def test_navigation_forwarded(self):
        app, screen = make_app()
        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.action_nav_down()
        screen.navigate_task.assert_awaited_once_with(1)


class TestSearchSubmit:
    """Tests for submitting the search input."""

    @pytest.mark.asyncio
    async def test_submit_applies_parsed_filter(self):
        app, screen = make_app()
        search_bar = MagicMock(spec=SearchBar)
        search_bar.expression = "tag:legal"
        screen.query_one.return_value = search_bar
        event = MagicMock()
        event.input.id = "search-input"
        event.value = "  tag:legal "

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.on_input_submitted(event)

        search_bar.submit.assert_called_once_with("  tag:legal ")
        app.services.filter_service.parse.assert_called_once_with("tag:legal")
        screen.set_filter.assert_called_once_with(
            app.services.filter_service.parse.return_value, "tag:legal"
        )
        screen.render_board.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_inputs_ignored(self):
        app, screen = make_app()
        event = MagicMock()
        event.input.id = "something-else"

        with patch.object(ExitboardApp, "_board_screen", return_value=screen):
            await app.on_input_submitted(event)

        screen.set_filter.assert_not_called()
