"""Connect the knowledge tool for the duration of one CLI command."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import click

from teachmate.errors import ToolError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.tools.factory import create_tool_client


@asynccontextmanager
async def optional_adapter() -> AsyncIterator[KnowledgeQueryAdapter | None]:
    """Yield an adapter whose connection may have failed, or None when lookups are off."""
    client = create_tool_client()
    if client is None:
        yield None
        return

    try:
        await client.connect()
    except ToolError as exc:
        click.echo(f"warning: knowledge tool unavailable ({exc})", err=True)
    try:
        yield KnowledgeQueryAdapter(client)
    finally:
        if client.is_connected:
            await client.disconnect()


@asynccontextmanager
async def connected_adapter() -> AsyncIterator[KnowledgeQueryAdapter]:
    """Yield a connected adapter or fail the command."""
    async with optional_adapter() as adapter:
        if adapter is None:
            raise click.ClickException("Knowledge tool is disabled (KNOWLEDGE_PROVIDER=off)")
        if not adapter.is_available():
            raise click.ClickException("Could not reach the knowledge tool")
        yield adapter
