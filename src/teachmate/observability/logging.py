from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, MutableMapping

import structlog

run_id_var: ContextVar[str] = ContextVar("run_id", default="")
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _add_run_id(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    run_id = run_id_var.get("")
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def _add_request_id(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    request_id = request_id_var.get("")
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output and contextvar support."""

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            timestamper,
            _add_run_id,
            _add_request_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a configured structlog logger."""

    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)


def get_run_id() -> str:
    """Return the current workflow run ID from contextvars."""

    return run_id_var.get("")


def get_request_id() -> str:
    """Return the current HTTP request ID from contextvars."""

    return request_id_var.get("")


logger = get_logger("teachmate")
