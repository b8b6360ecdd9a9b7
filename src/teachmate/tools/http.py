"""HTTP transport: calls knowledge tools through a JSON tool gateway."""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from teachmate.errors import TransportError
from teachmate.tools.base import ToolReply, text_reply


class HttpToolTransport:
    """POST `{base_url}/tools/{name}` with the arguments as the JSON body.

    Gateways that answer with an MCP-style `{"content": [...], "isError": ...}`
    body are passed through; any other body becomes a single text item so the
    normal payload decoding applies.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def open(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def call_tool(self, name: str, arguments: Mapping[str, Any]) -> ToolReply:
        if self._client is None:
            raise TransportError("HTTP tool transport is not open", tool_name=name)
        url = f"{self._base_url}/tools/{name}"
        headers = {"content-type": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        response = await self._client.post(url, headers=headers, content=json.dumps(dict(arguments)))
        if response.status_code >= 400:
            raise TransportError(
                f"Tool gateway returned HTTP {response.status_code} for '{name}'",
                tool_name=name,
            )
        text = response.text or ""
        try:
            body = json.loads(text) if text else None
        except json.JSONDecodeError:
            return text_reply(text)
        if isinstance(body, dict) and isinstance(body.get("content"), list):
            return ToolReply(content=list(body["content"]), is_error=bool(body.get("isError")))
        return text_reply(text)
