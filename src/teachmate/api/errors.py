"""Helpers for consistent API error payloads."""

from __future__ import annotations

from fastapi import HTTPException

from teachmate.errors import DomainError


def to_http_exception(err: DomainError) -> HTTPException:
    """Convert DomainError to HTTPException with consistent payload."""
    return HTTPException(
        status_code=err.status_code,
        detail={"error": err.error, "detail": str(err)},
    )


__all__ = ["DomainError", "to_http_exception"]
