"""Knowledge tool CLI commands."""

from __future__ import annotations

from typing import Awaitable, Callable

import anyio
import click

from teachmate.cli.session import connected_adapter
from teachmate.cli.ui import console, render_answer, render_sources_table
from teachmate.errors import ToolError
from teachmate.knowledge.models import SourceMeta


def _run_or_fail(func: Callable[[], Awaitable[None]]) -> None:
    try:
        anyio.run(func)
    except ToolError as exc:
        raise click.ClickException(f"{exc.error}: {exc}") from exc


@click.command("ask")
@click.argument("question")
@click.option("--notebook", "notebook_id", help="Knowledge tool notebook id to query")
def ask(question: str, notebook_id: str | None) -> None:
    """Ask the knowledge tool a question and show the cited answer."""

    async def _run() -> None:
        async with connected_adapter() as adapter:
            render_answer(await adapter.query(question, source_id=notebook_id))

    _run_or_fail(_run)


@click.group()
def notebooks() -> None:
    """Manage the knowledge tool's notebooks."""


@notebooks.command("list")
def notebooks_list() -> None:
    """List notebooks known to the knowledge tool."""

    async def _run() -> None:
        async with connected_adapter() as adapter:
            sources = await adapter.list_sources()
        if not sources:
            console.print("[yellow]No notebooks registered[/yellow]")
            return
        render_sources_table(sources)

    _run_or_fail(_run)


@notebooks.command("add")
@click.argument("url")
@click.option("--name", required=True, help="Display name for the notebook")
@click.option("--subject", help="Subject, used as the default topic")
@click.option("--description", help="Notebook description")
def notebooks_add(url: str, name: str, subject: str | None, description: str | None) -> None:
    """Register a new notebook with the knowledge tool."""

    async def _run() -> None:
        async with connected_adapter() as adapter:
            source_id = await adapter.create_source(
                url, SourceMeta(name=name, subject=subject, description=description)
            )
        console.print(f"[green]✓ Notebook added:[/green] {source_id}")

    _run_or_fail(_run)


@notebooks.command("select")
@click.argument("notebook_id")
def notebooks_select(notebook_id: str) -> None:
    """Make a notebook the knowledge tool's active one."""

    async def _run() -> None:
        async with connected_adapter() as adapter:
            await adapter.select_source(notebook_id)
        console.print(f"[green]✓ Active notebook:[/green] {notebook_id}")

    _run_or_fail(_run)


def register(cli: click.Group) -> None:
    cli.add_command(ask)
    cli.add_command(notebooks)
