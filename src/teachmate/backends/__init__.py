"""Internal collaborator boundaries.

The workflow only sees the Protocols in `teachmate.backends.protocols`;
concrete backends are picked by provider mode in `get_chat_backend`.
"""

from __future__ import annotations

from teachmate.backends.fake import FakeChatBackend
from teachmate.backends.llama_stack import LlamaStackChatBackend
from teachmate.backends.protocols import (
    AnalogyLookup,
    AnalogyRecord,
    ChatBackend,
    ChatMessage,
    NotebookAccessStore,
    NotebookRecord,
    NotebookShare,
)
from teachmate.config import effective_llama_stack_provider, get_settings


def get_chat_backend() -> ChatBackend:
    """Return the text-generation backend for the configured provider mode."""
    mode = effective_llama_stack_provider(get_settings())
    if mode == "real":
        return LlamaStackChatBackend()
    if mode == "fake":
        return FakeChatBackend()
    raise RuntimeError("Text generation is disabled (LLAMA_STACK_PROVIDER=off)")


__all__ = [
    "AnalogyLookup",
    "AnalogyRecord",
    "ChatBackend",
    "ChatMessage",
    "FakeChatBackend",
    "LlamaStackChatBackend",
    "NotebookAccessStore",
    "NotebookRecord",
    "NotebookShare",
    "get_chat_backend",
]
