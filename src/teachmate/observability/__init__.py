"""Teachmate observability - structured JSON logs via structlog.

Usage:
    from teachmate.observability import get_logger

    logger = get_logger(__name__)
    logger.info("tool_call_started", tool=name)
"""

from __future__ import annotations

from teachmate.observability.logging import (
    configure_logging,
    get_logger,
    get_request_id,
    get_run_id,
    request_id_var,
    run_id_var,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_request_id",
    "get_run_id",
    "init_observability",
    "request_id_var",
    "run_id_var",
]

_OBSERVABILITY_INITIALIZED = False


def init_observability() -> None:
    """Initialize logging for the process (idempotent).

    This is intentionally *not* executed on import so `teachmate` can be used as a
    library without mutating global logging configuration.
    """
    global _OBSERVABILITY_INITIALIZED
    if _OBSERVABILITY_INITIALIZED:
        return
    from teachmate.config import settings

    configure_logging(settings.log_level)
    _OBSERVABILITY_INITIALIZED = True
