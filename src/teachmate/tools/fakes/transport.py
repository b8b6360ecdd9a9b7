"""In-memory tool transport for tests and fake provider mode."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Tuple, Union

from teachmate.tools.base import ToolReply, format_tool_error, text_reply

__all__ = ["InMemoryToolTransport", "ToolHandler"]

HandlerResult = Union[ToolReply, Dict[str, Any], str]
ToolHandler = Callable[[Dict[str, Any]], Union[HandlerResult, Awaitable[HandlerResult]]]


@dataclass
class InMemoryToolTransport:
    """Dispatches tool calls to Python handlers instead of a process.

    Handlers receive the call arguments and return a `ToolReply`, a dict
    (wrapped as a JSON text item) or a raw string (wrapped verbatim). A handler
    that raises simulates a broken channel.
    """

    handlers: Dict[str, ToolHandler] = field(default_factory=dict)
    open_error: Exception | None = None
    calls: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)
    is_open: bool = False
    open_count: int = 0
    close_count: int = 0

    async def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True
        self.open_count += 1

    async def close(self) -> None:
        self.is_open = False
        self.close_count += 1

    async def call_tool(self, name: str, arguments: Mapping[str, Any]) -> ToolReply:
        args = dict(arguments)
        self.calls.append((name, args))
        handler = self.handlers.get(name)
        if handler is None:
            return text_reply(format_tool_error(f"Unknown tool: {name}"))
        result = handler(args)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, ToolReply):
            return result
        return text_reply(result)

    def calls_for(self, name: str) -> List[Dict[str, Any]]:
        return [args for tool, args in self.calls if tool == name]
