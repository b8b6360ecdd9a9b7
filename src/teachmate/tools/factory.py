"""Build the knowledge ToolClient for the configured provider mode and transport."""

from __future__ import annotations

from teachmate.config import Settings, effective_knowledge_provider, get_settings
from teachmate.observability.logging import get_logger
from teachmate.tools.base import ToolTransport
from teachmate.tools.client import ToolClient

logger = get_logger(__name__)


def create_transport(settings: Settings) -> ToolTransport:
    """Return the transport selected by KNOWLEDGE_PROVIDER / KNOWLEDGE_TRANSPORT."""
    if effective_knowledge_provider(settings) == "fake":
        from teachmate.tools.fakes import FakeNotebookLibrary

        return FakeNotebookLibrary().transport()

    if settings.knowledge_transport == "http":
        from teachmate.tools.http import HttpToolTransport

        return HttpToolTransport(
            base_url=settings.knowledge_http_url,
            api_key=settings.knowledge_api_key or None,
            timeout=settings.tool_timeout_seconds,
        )

    from teachmate.tools.stdio import StdioToolTransport

    return StdioToolTransport(
        settings.knowledge_command,
        settings.knowledge_args,
        client_name=settings.tool_client_name,
        client_version=settings.tool_client_version,
    )


def create_tool_client(settings: Settings | None = None) -> ToolClient | None:
    """Return an unconnected ToolClient, or None when knowledge lookups are off."""
    settings = settings or get_settings()
    mode = effective_knowledge_provider(settings)
    if mode == "off":
        logger.info("knowledge_tool_disabled")
        return None
    transport = create_transport(settings)
    logger.info(
        "knowledge_tool_configured",
        mode=mode,
        transport=type(transport).__name__,
    )
    return ToolClient(transport, timeout_seconds=settings.tool_timeout_seconds)
