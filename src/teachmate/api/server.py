"""FastAPI application for the Teachmate API."""

from __future__ import annotations

import time
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from teachmate.api.dependencies import verify_api_key
from teachmate.api.errors import DomainError, to_http_exception
from teachmate.api.routes import chat, health, playbook, research
from teachmate.app_version import get_app_version
from teachmate.backends import get_chat_backend
from teachmate.backends.protocols import ChatBackend, NotebookAccessStore
from teachmate.config import settings
from teachmate.config.provider_modes import effective_llama_stack_provider
from teachmate.errors import ToolError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.observability.logging import logger, request_id_var
from teachmate.storage import InMemoryNotebookRegistry
from teachmate.tools.client import ToolClient
from teachmate.tools.factory import create_tool_client
from teachmate.workflows.langgraph.graph import WorkflowGraph

ToolClientFactory = Callable[[], ToolClient | None]
ChatBackendFactory = Callable[[], ChatBackend]


def _build_lifespan(
    tool_client_factory: ToolClientFactory,
    chat_backend_factory: ChatBackendFactory,
    registry: NotebookAccessStore | None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Connect the knowledge tool, build the workflow, disconnect on shutdown."""
        from teachmate.observability import init_observability

        init_observability()
        logger.info("Starting Teachmate API...")

        tool_client = tool_client_factory()
        adapter = KnowledgeQueryAdapter(tool_client) if tool_client is not None else None
        if tool_client is not None:
            try:
                await tool_client.connect()
            except ToolError as exc:
                # Adapter reports unavailable; research branch skips until restart.
                logger.error("Knowledge tool connection failed: %s", exc)

        llama_mode = effective_llama_stack_provider(settings)
        if llama_mode == "off":
            logger.info("Text generation disabled (LLAMA_STACK_PROVIDER=off)")
            workflow = None
        else:
            workflow = WorkflowGraph(chat=chat_backend_factory(), adapter=adapter)

        app.state.tool_client = tool_client
        app.state.knowledge_adapter = adapter
        app.state.notebook_registry = registry or InMemoryNotebookRegistry()
        app.state.workflow = workflow

        yield

        logger.info("Shutting down Teachmate API...")
        if tool_client is not None and tool_client.is_connected:
            try:
                await tool_client.disconnect()
            except Exception as exc:
                logger.warning("Error closing knowledge tool connection: %s", exc)

    return lifespan


async def request_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Middleware to manage X-Request-ID header and contextvar propagation."""

    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    token = request_id_var.set(request_id)
    try:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request_complete",
            path=str(request.url.path),
            method=request.method,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
    finally:
        request_id_var.reset(token)

    response.headers["X-Request-ID"] = request_id
    return response


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return consistent error envelope."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error", "http_error")
        detail = detail.get("detail", detail)
    else:
        error_code = "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_code, "detail": detail},
        headers=exc.headers,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=str(request.url.path),
            error=exc.error,
            exc=str(exc),
        )
    return await http_exception_handler(request, to_http_exception(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or malformed request fields are a 400, not FastAPI's default 422."""
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "detail": f"Invalid or missing fields: {', '.join(f for f in fields if f)}",
        },
    )


def create_app(
    *,
    tool_client_factory: ToolClientFactory = create_tool_client,
    chat_backend_factory: ChatBackendFactory = get_chat_backend,
    registry: NotebookAccessStore | None = None,
) -> FastAPI:
    """Build the API. Collaborator factories are injectable for tests."""
    app = FastAPI(
        title="Teachmate API",
        description="Teacher assistant with grounded answers from a knowledge tool",
        version=get_app_version(),
        lifespan=_build_lifespan(tool_client_factory, chat_backend_factory, registry),
    )

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    auth_deps = [Depends(verify_api_key)]
    app.include_router(health.router)  # Health check is public
    app.include_router(research.router, dependencies=auth_deps)
    app.include_router(chat.router, dependencies=auth_deps)
    app.include_router(playbook.router, dependencies=auth_deps)
    return app


app = create_app()
