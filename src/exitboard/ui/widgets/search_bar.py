"""Search input and the summary line shown while a search is active."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Input, Static


def search_summary(expression: str, matched: int, total: int, hidden_columns: int) -> str:
    """Markup for the summary line: the query, match count and hidden columns."""
    parts = [f"[dim]Search:[/] {escape(expression)}", f"{matched} of {total} tasks"]
    if hidden_columns:
        noun = "column" if hidden_columns == 1 else "columns"
        parts.append(f"[dim]{hidden_columns} empty {noun} hidden[/]")
    parts.append("[dim]Esc to clear[/]")
    return "  ".join(parts)


class SearchBar(Widget):
    """Bottom bar holding the search input and the active search summary.

    The input is only shown while editing (``-editing``); the summary only
    while a search is applied (``-active``).
    """

    DEFAULT_CSS = """
    SearchBar {
        height: auto;
        dock: bottom;
        layer: command;
    }

    SearchBar #search-summary {
        display: none;
        height: 1;
        padding: 0 1;
        background: $surface;
    }

    SearchBar.-active #search-summary {
        display: block;
    }

    SearchBar #search-input {
        display: none;
        height: 1;
        border: none;
        background: $boost;
    }

    SearchBar.-editing #search-input {
        display: block;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="search-bar")
        self.expression = ""

    def compose(self) -> ComposeResult:
        yield Static("", id="search-summary")
        yield Input(
            placeholder="valuation tag:legal -tag:done priority:high assignee:dana",
            id="search-input",
        )

    @property
    def editing(self) -> bool:
        return self.has_class("-editing")

    def open(self) -> None:
        """Show the input, prefilled with the active search, and focus it."""
        self.add_class("-editing")
        search_input = self.query_one("#search-input", Input)
        search_input.value = self.expression
        search_input.focus()

    def close(self) -> None:
        self.remove_class("-editing")

    def submit(self, expression: str) -> None:
        self.expression = expression.strip()
        self.close()

    def clear(self) -> None:
        self.expression = ""
        self.query_one("#search-input", Input).value = ""
        self.show_summary(None)

    def show_summary(self, summary: str | None) -> None:
        """Show the summary line, or hide it when ``summary`` is None."""
        self.query_one("#search-summary", Static).update(summary or "")
        self.set_class(summary is not None, "-active")
