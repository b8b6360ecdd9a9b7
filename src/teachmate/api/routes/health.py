"""Health check endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from teachmate.api.schemas import HealthResponse
from teachmate.app_version import get_app_version
from teachmate.config import settings
from teachmate.config.provider_modes import provider_modes

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> dict[str, Any]:
    """Liveness check; degraded providers are reported, not failed."""

    modes = provider_modes(settings)
    tool_client = getattr(request.app.state, "tool_client", None)
    return {
        "status": "healthy",
        "version": get_app_version(),
        "degraded_mode": any(mode != "real" for mode in modes.values()),
        "provider_modes": modes,
        "knowledge_connected": tool_client.is_connected if tool_client is not None else None,
    }
