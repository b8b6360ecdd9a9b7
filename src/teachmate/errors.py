"""Domain-specific exceptions shared by the workflow, tool client and API."""

from __future__ import annotations

from fastapi import status


class DomainError(Exception):
    """Base class for domain errors."""

    error: str = "domain_error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, error: str | None = None, status_code: int | None = None):
        super().__init__(message)
        if error:
            self.error = error
        if status_code:
            self.status_code = status_code


class ValidationError(DomainError):
    error = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class AccessDeniedError(DomainError):
    error = "access_denied"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DomainError):
    error = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(DomainError):
    """Graph wiring inconsistency. Always fatal, never retried."""

    error = "configuration_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ToolError(DomainError):
    """Base class for failures talking to the knowledge tool process."""

    error = "tool_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        tool_name: str | None = None,
        error: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, error=error, status_code=status_code)
        self.tool_name = tool_name


class TransportError(ToolError):
    """Tool process unreachable, not connected, or the call timed out."""

    error = "transport_error"


class DecodeError(ToolError):
    """Reply payload not parseable or missing expected fields."""

    error = "decode_error"


class ToolFailure(ToolError):
    """The tool explicitly reported failure in its payload."""

    error = "tool_failure"


__all__ = [
    "AccessDeniedError",
    "ConfigurationError",
    "DecodeError",
    "DomainError",
    "NotFoundError",
    "ToolError",
    "ToolFailure",
    "TransportError",
    "ValidationError",
]
