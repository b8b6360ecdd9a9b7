"""Common FastAPI dependencies for the Teachmate API."""

from __future__ import annotations

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from teachmate.backends.protocols import NotebookAccessStore
from teachmate.config import settings
from teachmate.errors import AccessDeniedError, ConfigurationError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.workflows.langgraph.graph import WorkflowGraph

__all__ = [
    "api_key_header",
    "authorized_source_ref",
    "get_knowledge_adapter",
    "get_notebook_registry",
    "get_workflow",
    "source_ref",
    "verify_api_key",
]


def get_knowledge_adapter(request: Request) -> KnowledgeQueryAdapter:
    """Return the app's knowledge adapter; fails when knowledge lookups are off."""

    adapter = getattr(request.app.state, "knowledge_adapter", None)
    if adapter is None:
        raise ConfigurationError(
            "Knowledge tool is disabled (KNOWLEDGE_PROVIDER=off)",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return adapter


def get_notebook_registry(request: Request) -> NotebookAccessStore:
    return request.app.state.notebook_registry


def get_workflow(request: Request) -> WorkflowGraph:
    """Return the compiled workflow built at startup."""

    workflow = getattr(request.app.state, "workflow", None)
    if workflow is None:
        raise ConfigurationError(
            "Text generation is disabled (LLAMA_STACK_PROVIDER=off)",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return workflow


async def source_ref(registry: NotebookAccessStore, notebook_id: str) -> str:
    """Map a registered notebook id to the knowledge tool's id; unknown ids pass through."""
    record = await registry.find_by_id(notebook_id)
    return record.notebook_ref if record is not None else notebook_id


async def authorized_source_ref(registry: NotebookAccessStore, notebook_id: str, user_id: str) -> str:
    """Like `source_ref`, but only for a notebook `user_id` can read."""
    if not await registry.can_access(notebook_id, user_id):
        raise AccessDeniedError("Access denied to this notebook")
    return await source_ref(registry, notebook_id)


# API key verification (shared)
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(api_key_header)) -> str:
    """Verify API key authentication for all endpoints."""

    if api_key is None:
        raise HTTPException(status_code=401, detail="Missing API key")
    if api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return api_key
