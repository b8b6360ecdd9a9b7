"""Tests for ToolClient connection lifecycle, timeouts and reply decoding."""

from __future__ import annotations

import anyio
import pytest

from teachmate.errors import DecodeError, ToolFailure, TransportError
from teachmate.tools.base import ToolReply, format_tool_error, format_tool_success, text_reply
from teachmate.tools.client import ToolClient
from teachmate.tools.fakes import InMemoryToolTransport


def _client(handlers=None, **kwargs) -> tuple[ToolClient, InMemoryToolTransport]:  # type: ignore[no-untyped-def]
    transport = InMemoryToolTransport(handlers=handlers or {}, **kwargs)
    return ToolClient(transport, timeout_seconds=1.0), transport


@pytest.mark.anyio
async def test_connect_and_disconnect() -> None:
    client, transport = _client()

    await client.connect()
    assert client.is_connected
    assert transport.is_open

    await client.disconnect()
    assert not client.is_connected
    assert transport.close_count == 1


@pytest.mark.anyio
async def test_connect_twice_is_a_usage_error() -> None:
    client, transport = _client()
    await client.connect()

    with pytest.raises(RuntimeError, match="already connected"):
        await client.connect()
    assert transport.open_count == 1


@pytest.mark.anyio
async def test_connect_failure_raises_transport_error() -> None:
    client, _ = _client(open_error=FileNotFoundError("node: not found"))

    with pytest.raises(TransportError, match="node: not found"):
        await client.connect()
    assert not client.is_connected


@pytest.mark.anyio
async def test_disconnect_when_disconnected_is_noop() -> None:
    client, transport = _client()
    await client.disconnect()
    assert transport.close_count == 0


@pytest.mark.anyio
async def test_invoke_requires_connection() -> None:
    client, transport = _client({"ask_question": lambda _a: format_tool_success()})

    with pytest.raises(TransportError, match="not connected"):
        await client.invoke("ask_question", {"query": "q"})
    assert transport.calls == []


@pytest.mark.anyio
async def test_invoke_times_out() -> None:
    async def slow(_args):  # type: ignore[no-untyped-def]
        await anyio.sleep(5)
        return format_tool_success()

    transport = InMemoryToolTransport(handlers={"ask_question": slow})
    client = ToolClient(transport, timeout_seconds=0.05)
    await client.connect()

    with pytest.raises(TransportError, match="timed out"):
        await client.invoke("ask_question", {"query": "q"})
    # Connection is left as-is for the next call.
    assert client.is_connected


@pytest.mark.anyio
async def test_invoke_wraps_channel_failures() -> None:
    def broken(_args):  # type: ignore[no-untyped-def]
        raise ConnectionResetError("pipe closed")

    client, _ = _client({"ask_question": broken})
    await client.connect()

    with pytest.raises(TransportError, match="pipe closed"):
        await client.invoke("ask_question", {})


@pytest.mark.anyio
async def test_invocations_are_serialized() -> None:
    in_flight = 0
    max_in_flight = 0

    async def handler(_args):  # type: ignore[no-untyped-def]
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await anyio.sleep(0.01)
        in_flight -= 1
        return format_tool_success()

    client, transport = _client({"ask_question": handler})
    await client.connect()

    async with anyio.create_task_group() as tg:
        for i in range(5):
            tg.start_soon(client.invoke, "ask_question", {"query": str(i)})

    assert max_in_flight == 1
    assert len(transport.calls) == 5


@pytest.mark.anyio
async def test_call_decodes_json_payload() -> None:
    client, _ = _client({"list_notebooks": lambda _a: format_tool_success({"notebooks": []})})
    await client.connect()

    assert await client.call("list_notebooks") == {"success": True, "data": {"notebooks": []}}


@pytest.mark.anyio
async def test_call_reply_without_text_is_transport_error() -> None:
    client, _ = _client(
        {"ask_question": lambda _a: ToolReply(content=[{"type": "image", "data": "..."}])}
    )
    await client.connect()

    with pytest.raises(TransportError, match="no text payload"):
        await client.call("ask_question", {})


@pytest.mark.anyio
@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"just a string"'])
async def test_call_malformed_payload_is_decode_error(raw: str) -> None:
    client, _ = _client({"ask_question": lambda _a: raw})
    await client.connect()

    with pytest.raises(DecodeError):
        await client.call("ask_question", {})


@pytest.mark.anyio
async def test_call_success_false_is_tool_failure() -> None:
    client, _ = _client({"ask_question": lambda _a: format_tool_error("Notebook not found: nb-9")})
    await client.connect()

    with pytest.raises(ToolFailure, match="Notebook not found: nb-9") as exc_info:
        await client.call("ask_question", {})
    assert exc_info.value.tool_name == "ask_question"


@pytest.mark.anyio
async def test_call_error_envelope_is_tool_failure() -> None:
    client, _ = _client({"ask_question": lambda _a: text_reply("quota exceeded", is_error=True)})
    await client.connect()

    with pytest.raises(ToolFailure, match="quota exceeded"):
        await client.call("ask_question", {})


@pytest.mark.anyio
async def test_unknown_tool_is_reported_by_the_tool() -> None:
    client, _ = _client()
    await client.connect()

    with pytest.raises(ToolFailure, match="Unknown tool: nope"):
        await client.call("nope", {})


def test_timeout_defaults_to_settings(monkeypatch) -> None:
    monkeypatch.setenv("TOOL_TIMEOUT_SECONDS", "12.5")
    from teachmate.config import reset_settings_cache

    reset_settings_cache()
    assert ToolClient(InMemoryToolTransport()).timeout_seconds == 12.5
