"""Llama Stack backend adapter.

This keeps direct SDK usage in one place so app logic can depend on small,
testable Protocols instead of vendor types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from teachmate.backends.protocols import ChatMessage
from teachmate.config import settings
from teachmate.llama_clients import get_async_client


@dataclass(frozen=True)
class LlamaStackChatBackend:
    """Default text-generation backend using Llama Stack chat completions."""

    async_client: object | None = None
    model_id: str | None = None

    def _async(self) -> Any:
        return self.async_client or get_async_client()

    async def generate(self, messages: list[ChatMessage]) -> ChatMessage:
        client = self._async()
        model = self.model_id or settings.llama_stack_model
        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            stream=False,
        )
        choices = getattr(response, "choices", None)
        if choices is not None and not choices:
            raise RuntimeError("LLM returned no choices")
        return {"role": "assistant", "content": _extract_content(response)}


def _extract_content(response: object) -> str:
    choices = getattr(response, "choices", None)
    if choices:
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) if message else None
        if content:
            return str(content)
    content = getattr(response, "content", None)
    return str(content) if content else ""
