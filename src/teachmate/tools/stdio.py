"""Stdio transport: spawns the knowledge tool process and speaks MCP over its pipes."""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Any, Mapping

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import Implementation

from teachmate.errors import TransportError
from teachmate.observability.logging import get_logger
from teachmate.tools.base import ToolReply

logger = get_logger(__name__)


class StdioToolTransport:
    """MCP client session over a spawned subprocess."""

    def __init__(
        self,
        command: str,
        args: list[str] | None = None,
        *,
        env: dict[str, str] | None = None,
        client_name: str = "teachmate",
        client_version: str = "1.0.0",
    ) -> None:
        self._params = StdioServerParameters(command=command, args=list(args or []), env=env)
        self._client_info = Implementation(name=client_name, version=client_version)
        self._stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None

    async def open(self) -> None:
        stack = AsyncExitStack()
        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_client(self._params))
            session = await stack.enter_async_context(
                ClientSession(read_stream, write_stream, client_info=self._client_info)
            )
            await session.initialize()
        except BaseException:
            await stack.aclose()
            raise
        self._stack = stack
        self._session = session
        logger.info(
            "stdio_tool_process_started",
            command=self._params.command,
            args=self._params.args,
        )

    async def close(self) -> None:
        stack, self._stack, self._session = self._stack, None, None
        if stack is not None:
            await stack.aclose()

    async def call_tool(self, name: str, arguments: Mapping[str, Any]) -> ToolReply:
        if self._session is None:
            raise TransportError("Stdio tool session is not open", tool_name=name)
        result = await self._session.call_tool(name, arguments=dict(arguments))
        return ToolReply(
            content=[item.model_dump(mode="json") for item in result.content],
            is_error=bool(result.isError),
        )
