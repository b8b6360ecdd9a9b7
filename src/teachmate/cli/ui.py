"""Shared CLI UI helpers (Rich formatting)."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from teachmate.knowledge.models import SourceEntry, ToolAnswer

console = Console()

CONFIDENCE_COLORS = {
    "high": "green",
    "medium": "yellow",
    "low": "yellow",
    "not_found": "red",
}


def format_confidence(confidence: str) -> str:
    """Return colorized confidence label for terminal output."""
    color = CONFIDENCE_COLORS.get(confidence, "white")
    return f"[{color}]{confidence}[/{color}]"


def render_answer(answer: ToolAnswer) -> None:
    console.print(f"[bold]Confidence:[/bold] {format_confidence(answer.confidence)}")
    console.print(answer.answer_text, markup=False)
    if answer.citations:
        table = Table(title="Citations", show_lines=False)
        table.add_column("#", style="dim")
        table.add_column("Source", style="cyan")
        table.add_column("Quote")
        table.add_column("Location", style="magenta")
        for index, citation in enumerate(answer.citations, start=1):
            table.add_row(
                str(index),
                escape(citation.source),
                escape(citation.quote),
                escape(citation.location or "-"),
            )
        console.print(table)
    if answer.follow_ups:
        console.print("[bold]Follow-ups:[/bold]")
        for follow_up in answer.follow_ups:
            console.print(f"  - {escape(follow_up)}")


def render_sources_table(sources: Iterable[SourceEntry]) -> None:
    """Render the knowledge tool's notebooks using Rich."""
    table = Table(title="Notebooks", show_lines=False)
    table.add_column("ID", style="white")
    table.add_column("Name", style="cyan")
    table.add_column("Topics", style="magenta")
    table.add_column("URL", style="dim")
    for source in sources:
        table.add_row(
            escape(source.id),
            escape(source.name),
            escape(", ".join(source.topics or [])),
            escape(source.url),
        )
    console.print(table)
