"""Shared Llama Stack client for the respond node's text generation.

Only `backends.llama_stack.LlamaStackChatBackend` calls the model; it borrows
this process-wide client unless a test hands it one directly. The client is
built lazily so `LLAMA_STACK_URL` can be set before first use, and
`clear_client_cache()` forces the next caller to pick up changed settings.
"""

from __future__ import annotations

from functools import lru_cache

from llama_stack_client import AsyncLlamaStackClient

from teachmate.config import settings
from teachmate.observability.logging import get_logger

logger = get_logger(__name__)

__all__ = ["clear_client_cache", "get_async_client"]


@lru_cache(maxsize=1)
def get_async_client() -> AsyncLlamaStackClient:
    logger.info(
        "llama_stack_client_created",
        url=settings.llama_stack_url,
        model=settings.llama_stack_model,
        timeout_s=settings.llama_stack_timeout_seconds,
    )
    return AsyncLlamaStackClient(
        base_url=settings.llama_stack_url,
        timeout=settings.llama_stack_timeout_seconds,
    )


def clear_client_cache() -> None:
    get_async_client.cache_clear()
