"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import httpx
import pytest

# Ensure source tree is importable without editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def pytest_configure(config):
    """Configure pytest markers and environment for tests."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")

    # Set safe defaults for unit tests to avoid external dependencies.
    # These MUST override any developer shell/.env values to keep the test run deterministic.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["USE_FAKE_PROVIDERS"] = "false"
    os.environ["LLAMA_STACK_PROVIDER"] = "fake"
    os.environ["KNOWLEDGE_PROVIDER"] = "fake"
    os.environ["API_KEY"] = "test-api-key"
    os.environ["TOOL_TIMEOUT_SECONDS"] = "5"


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached Settings so monkeypatched env vars take effect per test."""
    from teachmate.config import reset_settings_cache

    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture(autouse=True)
def block_external_http(monkeypatch):
    """Fail the fast lane if code tries to hit the public internet.

    Allowlist only:
    - ASGI test host ("test") used with httpx.ASGITransport
    - localhost/loopback for local services
    """

    allowed_hosts = {"test", "testserver", "localhost", "127.0.0.1", "0.0.0.0"}

    async def _async_guard(self, method, url, *args, **kwargs):  # type: ignore[no-untyped-def]
        u = httpx.URL(url) if not isinstance(url, httpx.URL) else url
        if u.scheme in {"http", "https"} and (u.host or "") not in allowed_hosts:
            raise RuntimeError(f"External HTTP blocked in tests: {u!s}")
        return await _orig_async_request(self, method, url, *args, **kwargs)

    def _sync_guard(self, method, url, *args, **kwargs):  # type: ignore[no-untyped-def]
        u = httpx.URL(url) if not isinstance(url, httpx.URL) else url
        if u.scheme in {"http", "https"} and (u.host or "") not in allowed_hosts:
            raise RuntimeError(f"External HTTP blocked in tests: {u!s}")
        return _orig_sync_request(self, method, url, *args, **kwargs)

    _orig_async_request = httpx.AsyncClient.request
    _orig_sync_request = httpx.Client.request
    monkeypatch.setattr(httpx.AsyncClient, "request", _async_guard, raising=True)
    monkeypatch.setattr(httpx.Client, "request", _sync_guard, raising=True)

    yield


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio tests on asyncio."""
    return "asyncio"


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Default API headers for authenticated endpoints."""
    from teachmate.config import settings

    return {"X-API-Key": settings.api_key}
