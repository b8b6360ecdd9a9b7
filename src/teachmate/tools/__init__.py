"""Knowledge tool access: client, transports and reply decoding.

The workflow never touches a transport directly; it goes through
`teachmate.knowledge.KnowledgeQueryAdapter`, which wraps a `ToolClient`.
"""

from teachmate.tools.base import (
    ToolReply,
    ToolTransport,
    extract_text,
    format_tool_error,
    format_tool_success,
    parse_payload,
    text_reply,
)
from teachmate.tools.client import ToolClient
from teachmate.tools.factory import create_tool_client, create_transport

__all__ = [
    "ToolClient",
    "ToolReply",
    "ToolTransport",
    "create_tool_client",
    "create_transport",
    "extract_text",
    "format_tool_error",
    "format_tool_success",
    "parse_payload",
    "text_reply",
]
