"""Client for the long-lived knowledge tool connection.

State machine::

    Disconnected --connect()--> Connected --disconnect()--> Disconnected

Access is serialized: at most one `invoke()` is in flight per client and
concurrent callers queue on an `anyio.Lock`. The per-call timeout is the only
cancellation primitive; a timed-out call is reported as a `TransportError`
and the connection is left as-is for the next call.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

import anyio

from teachmate.config import settings
from teachmate.errors import ToolError, ToolFailure, TransportError
from teachmate.observability.logging import get_logger
from teachmate.tools.base import ToolReply, ToolTransport, extract_text, first_text, parse_payload

logger = get_logger(__name__)

__all__ = ["ToolClient"]


class ToolClient:
    """Owns one ToolTransport and decodes its replies."""

    def __init__(self, transport: ToolTransport, *, timeout_seconds: float | None = None) -> None:
        self._transport = transport
        self._timeout_seconds = timeout_seconds
        self._connected = False
        self._lock = anyio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def transport(self) -> ToolTransport:
        return self._transport

    @property
    def timeout_seconds(self) -> float:
        return float(self._timeout_seconds or settings.tool_timeout_seconds)

    async def connect(self) -> None:
        """Open the transport. Calling this while connected is a usage error."""
        if self._connected:
            raise RuntimeError("ToolClient is already connected; call disconnect() first")
        try:
            await self._transport.open()
        except Exception as exc:
            logger.warning("tool_connect_failed", exc=str(exc), exc_type=type(exc).__name__)
            raise TransportError(f"Failed to connect to knowledge tool: {exc}") from exc
        self._connected = True
        logger.info("tool_connected", transport=type(self._transport).__name__)

    async def disconnect(self) -> None:
        """Close the transport. No-op when already disconnected."""
        if not self._connected:
            return
        try:
            await self._transport.close()
        finally:
            self._connected = False
            logger.info("tool_disconnected", transport=type(self._transport).__name__)

    async def invoke(self, tool_name: str, arguments: Mapping[str, Any] | None = None) -> ToolReply:
        """Send one named call and wait for exactly one reply envelope.

        Raises:
            TransportError: not connected, transport failure, or timeout.
        """
        if not self._connected:
            raise TransportError("Knowledge tool is not connected", tool_name=tool_name)

        args = dict(arguments or {})
        timeout = self.timeout_seconds
        async with self._lock:
            started = time.monotonic()
            try:
                with anyio.fail_after(timeout):
                    reply = await self._transport.call_tool(tool_name, args)
            except TimeoutError as exc:
                logger.warning("tool_call_timed_out", tool=tool_name, timeout_s=timeout)
                raise TransportError(
                    f"Tool call '{tool_name}' timed out after {timeout:g}s",
                    tool_name=tool_name,
                ) from exc
            except ToolError:
                raise
            except Exception as exc:
                logger.warning(
                    "tool_call_failed",
                    tool=tool_name,
                    exc=str(exc),
                    exc_type=type(exc).__name__,
                )
                raise TransportError(
                    f"Tool call '{tool_name}' failed: {exc}", tool_name=tool_name
                ) from exc

        logger.debug(
            "tool_call_completed",
            tool=tool_name,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
            is_error=reply.is_error,
        )
        return reply

    async def call(self, tool_name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Invoke a tool and decode its reply into a JSON object.

        Raises:
            TransportError: see `invoke()`, or the envelope had no text payload.
            ToolFailure: the envelope is flagged as an error or `success` is false.
            DecodeError: the payload is not a JSON object.
        """
        reply = await self.invoke(tool_name, arguments)
        if reply.is_error:
            raise ToolFailure(
                first_text(reply) or f"Tool '{tool_name}' reported an error",
                tool_name=tool_name,
            )
        payload = parse_payload(extract_text(reply, tool_name), tool_name)
        if payload.get("success") is False:
            raise ToolFailure(
                str(payload.get("error") or f"Tool '{tool_name}' failed"),
                tool_name=tool_name,
            )
        return payload
