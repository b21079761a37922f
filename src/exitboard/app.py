"""exitboard TUI application."""

import logging

from textual.app import App
from textual.binding import Binding
from textual.widgets import Input

from .bootstrap import Services, build_services
from .config import Settings
from .repositories import TaskStoreError
from .ui.screens.board import BoardScreen
from .ui.widgets import SearchBar

logger = logging.getLogger(__name__)


class ExitboardApp(App):
    """exitboard - exit-planning kanban board.

    The app doubles as the services' notifier: ``App.notify`` is what the
    move service calls when a move fails.
    """

    TITLE = "exitboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Drag
        Binding("space", "grab", "Grab", show=True),
        Binding("enter", "drop", "Drop", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        # Filter mode
        Binding("/", "enter_filter", "Search", show=True),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.services: Services = build_services(self.settings, self)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(BoardScreen())

    async def on_unmount(self) -> None:
        await self.services.aclose()

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    async def action_refresh(self) -> None:
        """Reload the board from the store."""
        if screen := self._board_screen():
            self.services.config_service.reload()
            current = screen.get_current_task()
            await screen.load_board(focus_task_id=current.id if current else None)

    # Navigation actions
    async def action_nav_left(self) -> None:
        if screen := self._board_screen():
            await screen.navigate_column(-1)

    async def action_nav_right(self) -> None:
        if screen := self._board_screen():
            await screen.navigate_column(1)

    async def action_nav_up(self) -> None:
        if screen := self._board_screen():
            await screen.navigate_task(-1)

    async def action_nav_down(self) -> None:
        if screen := self._board_screen():
            await screen.navigate_task(1)

    # Drag actions
    async def action_grab(self) -> None:
        """Pick up the current task, or drop it if already held."""
        screen = self._board_screen()
        if screen is None:
            return
        if self.services.drag.is_dragging:
            await screen.drop()
        else:
            await screen.start_drag()

    async def action_drop(self) -> None:
        if screen := self._board_screen():
            await screen.drop()

    # Task actions
    async def action_new_task(self) -> None:
        """Create a task at the end of the current column."""
        screen = self._board_screen()
        if screen is None or self.services.drag.is_dragging:
            return

        try:
            task = await self.services.board_service.create_task(
                "New Task", status=screen.current_column_state
            )
        except (TaskStoreError, ValueError) as e:
            logger.warning("Task creation failed: %s", e)
            self.notify(str(e), title="Could not create task", severity="error")
            return

        await screen.render_board(focus_task_id=task.id)
        self.notify("Task created", timeout=2)

    # Search actions
    def action_enter_filter(self) -> None:
        """Open the search input."""
        if screen := self._board_screen():
            screen.query_one(SearchBar).open()

    async def action_escape(self) -> None:
        """Handle escape: cancel a drag, close the search input, or clear the search."""
        screen = self._board_screen()
        if screen is None:
            return

        if await screen.cancel_drag():
            return

        search_bar = screen.query_one(SearchBar)
        if search_bar.editing:
            search_bar.close()
        elif search_bar.expression:
            search_bar.clear()
            await self._apply_filter("")

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle search input submission."""
        if event.input.id != "search-input":
            return
        if screen := self._board_screen():
            search_bar = screen.query_one(SearchBar)
            search_bar.submit(event.value)
            await self._apply_filter(search_bar.expression)

    async def _apply_filter(self, expression: str) -> None:
        """Apply filter to the board."""
        screen = self._board_screen()
        if screen is None:
            return

        if expression:
            screen.set_filter(self.services.filter_service.parse(expression), expression)
        else:
            screen.set_filter(None, "")

        await screen.render_board()


def run(settings: Settings | None = None) -> None:
    """Run the exitboard application."""
    app = ExitboardApp(settings)
    app.run()
