"""Deterministic text-generation stub for dev/tests (LLAMA_STACK_PROVIDER=fake)."""

from __future__ import annotations

from teachmate.backends.protocols import ChatMessage


class FakeChatBackend:
    """Echo-style backend that records every request it receives."""

    def __init__(self, reply: str | None = None) -> None:
        self.reply = reply
        self.calls: list[list[ChatMessage]] = []

    async def generate(self, messages: list[ChatMessage]) -> ChatMessage:
        self.calls.append(list(messages))
        if self.reply is not None:
            return {"role": "assistant", "content": self.reply}
        last_user = next(
            (m.get("content", "") for m in reversed(messages) if m.get("role") == "user"),
            "",
        )
        return {"role": "assistant", "content": f"[fake] {last_user}".strip()}
