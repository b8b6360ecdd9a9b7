"""Reply envelope, transport protocol and decoding helpers for tool calls.

A tool reply is decoded in two stages:

1. `extract_text()` pulls the textual payload out of the reply envelope.
   A reply without a text item is treated like a broken channel
   (`TransportError`).
2. `parse_payload()` parses that text as a JSON object. Malformed payloads
   raise `DecodeError` so callers can tell "the tool answered garbage" apart
   from "the tool could not be reached".
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol

from teachmate.errors import DecodeError, TransportError

__all__ = [
    "ToolReply",
    "ToolTransport",
    "extract_text",
    "first_text",
    "format_tool_error",
    "format_tool_success",
    "parse_payload",
    "text_reply",
]


@dataclass(frozen=True)
class ToolReply:
    """Raw reply envelope: ordered content items plus the tool-level error flag."""

    content: list[dict[str, Any]] = field(default_factory=list)
    is_error: bool = False


class ToolTransport(Protocol):
    """Narrow capability the ToolClient needs from a transport (stdio, http, memory)."""

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def call_tool(self, name: str, arguments: Mapping[str, Any]) -> ToolReply: ...


def format_tool_error(message: str, details: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Format a tool error payload."""
    response: Dict[str, Any] = {"success": False, "error": message}
    if details:
        response["details"] = details
    return response


def format_tool_success(data: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Format a tool success payload."""
    response: Dict[str, Any] = {"success": True}
    if data is not None:
        response["data"] = data
    return response


def text_reply(payload: Any, *, is_error: bool = False) -> ToolReply:
    """Wrap a payload (JSON-serialized unless already a string) as a single text item."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return ToolReply(content=[{"type": "text", "text": text}], is_error=is_error)


def first_text(reply: ToolReply) -> str | None:
    for item in reply.content:
        if isinstance(item, Mapping) and item.get("type") == "text":
            text = item.get("text")
            if isinstance(text, str):
                return text
    return None


def extract_text(reply: ToolReply, tool_name: str | None = None) -> str:
    """Stage 1: return the textual payload of the reply envelope."""
    text = first_text(reply)
    if text is None:
        raise TransportError(
            f"Reply from '{tool_name or 'tool'}' carried no text payload",
            tool_name=tool_name,
        )
    return text


def parse_payload(text: str, tool_name: str | None = None) -> dict[str, Any]:
    """Stage 2: parse the textual payload as a JSON object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            f"Malformed payload from '{tool_name or 'tool'}': {exc.msg}",
            tool_name=tool_name,
        ) from exc
    if not isinstance(data, dict):
        raise DecodeError(
            f"Payload from '{tool_name or 'tool'}' is not a JSON object",
            tool_name=tool_name,
        )
    return data
