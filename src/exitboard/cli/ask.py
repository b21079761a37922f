"""Ask the ML intelligence API a question about the deal documents."""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..api import ApiError
from ..bootstrap import build_services
from ..config import Settings
from ..models import QueryResponse
from ..services import LoggingNotifier
from .output import error


def render_answer(answer: QueryResponse) -> Table:
    """Table of the sources behind an answer, most relevant first."""
    table = Table(title="Sources", expand=True)
    table.add_column("Document", overflow="fold")
    table.add_column("Relevance", justify="right", width=9)
    table.add_column("Excerpt", overflow="fold")
    for source in sorted(answer.sources, key=lambda s: s.relevance_score, reverse=True):
        table.add_row(
            escape(source.title or source.id),
            f"{source.relevance_score:.0%}",
            escape(source.snippet),
        )
    return table


async def _ask(settings: Settings, question: str) -> QueryResponse | None:
    services = build_services(settings, LoggingNotifier())
    try:
        if services.intelligence is None:
            return None
        return await services.intelligence.query(question)
    finally:
        await services.aclose()


def run_ask(settings: Settings, question: str) -> int:
    """Send one query and print the answer. Returns an exit code."""
    try:
        answer = asyncio.run(_ask(settings, question))
    except ApiError as e:
        error(f"Query failed: {e}")
        return 1

    if answer is None:
        error("No ML API key configured (set EXITBOARD_ML_API_KEY)")
        return 1

    console = Console()
    if not answer.response and not answer.sources:
        console.print("[dim]No answer (queries need at least 3 characters)[/]")
        return 0
    console.print(escape(answer.response))
    if answer.sources:
        console.print(render_answer(answer))
    return 0
