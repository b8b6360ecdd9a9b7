"""Tests for the /v1/research routes."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from teachmate.api.server import create_app
from teachmate.backends.fake import FakeChatBackend
from teachmate.tools.base import format_tool_error
from teachmate.tools.client import ToolClient
from teachmate.tools.fakes import FakeNotebookLibrary, InMemoryToolTransport


@pytest.fixture
def library() -> FakeNotebookLibrary:
    return FakeNotebookLibrary()


@pytest.fixture
def client(library: FakeNotebookLibrary) -> Iterator[TestClient]:
    app = create_app(
        tool_client_factory=lambda: ToolClient(library.transport(), timeout_seconds=1.0),
        chat_backend_factory=FakeChatBackend,
    )
    with TestClient(app) as test_client:
        yield test_client


def _create_notebook(client: TestClient, headers: dict[str, str], owner: str = "teacher-a") -> dict:
    response = client.post(
        "/v1/research/notebooks",
        json={
            "url": "https://notebooklm.google.com/notebook/algebra",
            "title": "Algebra",
            "owner_id": owner,
            "subject": "math",
            "grade_level": "8",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_api_key(client: TestClient) -> None:
    response = client.post("/v1/research/ask", json={"question": "q"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing API key"


def test_ask_requires_question(client: TestClient, api_headers) -> None:
    response = client.post("/v1/research/ask", json={}, headers=api_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_ask_without_notebook_returns_uncited_answer(client: TestClient, api_headers) -> None:
    response = client.post("/v1/research/ask", json={"question": "What is x?"}, headers=api_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["confidence"] == "medium"
    assert body["citations"] == []


def test_create_notebook_then_ask_it(client: TestClient, api_headers, library) -> None:
    notebook = _create_notebook(client, api_headers)

    assert notebook["notebook_ref"] == "fake-notebook-1"
    assert notebook["owner_id"] == "teacher-a"
    assert library.notebooks[0]["topics"] == ["math"]
    assert library.notebooks[0]["description"] == "Algebra - math"

    response = client.post(
        "/v1/research/ask",
        json={"question": "slope", "notebook_id": notebook["id"], "teacher_id": "teacher-a"},
        headers=api_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["confidence"] == "high"
    assert body["answer_text"] == "Algebra covers: slope"
    assert body["citations"][0]["source"] == "Algebra"


def test_ask_denied_for_teacher_without_access(client: TestClient, api_headers) -> None:
    notebook = _create_notebook(client, api_headers)

    response = client.post(
        "/v1/research/ask",
        json={"question": "slope", "notebook_id": notebook["id"], "teacher_id": "teacher-z"},
        headers=api_headers,
    )

    assert response.status_code == 403
    assert response.json()["error"] == "access_denied"


def test_create_notebook_description_defaults_to_general_subject(
    client: TestClient, api_headers, library
) -> None:
    response = client.post(
        "/v1/research/notebooks",
        json={"url": "https://example.org/misc", "title": "Misc", "owner_id": "teacher-a"},
        headers=api_headers,
    )

    assert response.status_code == 201
    assert library.notebooks[0]["description"] == "Misc - General"
    assert response.json()["description"] is None


def test_list_notebooks_requires_teacher(client: TestClient, api_headers) -> None:
    response = client.get("/v1/research/notebooks", headers=api_headers)
    assert response.status_code == 400


def test_share_flow(client: TestClient, api_headers) -> None:
    notebook = _create_notebook(client, api_headers)
    share_url = f"/v1/research/notebooks/{notebook['id']}/share"

    denied = client.post(
        share_url, json={"target_id": "student-1", "shared_by_id": "teacher-z"}, headers=api_headers
    )
    assert denied.status_code == 403

    shared = client.post(
        share_url, json={"target_id": "student-1", "shared_by_id": "teacher-a"}, headers=api_headers
    )
    assert shared.status_code == 200
    assert shared.json() == {"shared": True}

    listing = client.get(
        "/v1/research/notebooks", params={"teacher_id": "student-1"}, headers=api_headers
    ).json()
    assert listing["owned"] == []
    assert [nb["id"] for nb in listing["shared"]] == [notebook["id"]]

    student_ask = {"question": "slope", "notebook_id": notebook["id"], "student_id": "student-1"}
    allowed = client.post("/v1/research/student/ask", json=student_ask, headers=api_headers)
    assert allowed.status_code == 200
    assert allowed.json()["confidence"] == "high"

    unshared = client.delete(f"{share_url}/student-1", headers=api_headers)
    assert unshared.status_code == 200
    assert unshared.json() == {"unshared": True}

    after = client.post("/v1/research/student/ask", json=student_ask, headers=api_headers)
    assert after.status_code == 403


def test_student_ask_requires_fields(client: TestClient, api_headers) -> None:
    response = client.post(
        "/v1/research/student/ask", json={"question": "q"}, headers=api_headers
    )
    assert response.status_code == 400


def test_verify_content(client: TestClient, api_headers) -> None:
    notebook = _create_notebook(client, api_headers)

    response = client.post(
        "/v1/research/verify",
        json={"content": "Slope is rise over run", "notebook_id": notebook["id"]},
        headers=api_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["grounded"] is True
    assert body["citations"]


def test_verify_requires_notebook(client: TestClient, api_headers) -> None:
    response = client.post("/v1/research/verify", json={"content": "x"}, headers=api_headers)
    assert response.status_code == 400


def test_create_notebook_tool_failure_is_server_error(api_headers) -> None:
    transport = InMemoryToolTransport(
        handlers={"add_notebook": lambda _a: format_tool_error("invalid notebook url")}
    )
    app = create_app(
        tool_client_factory=lambda: ToolClient(transport, timeout_seconds=1.0),
        chat_backend_factory=FakeChatBackend,
    )
    with TestClient(app) as client:
        response = client.post(
            "/v1/research/notebooks",
            json={"url": "nope", "title": "T", "owner_id": "teacher-a"},
            headers=api_headers,
        )
        listing = client.get(
            "/v1/research/notebooks", params={"teacher_id": "teacher-a"}, headers=api_headers
        )

    assert response.status_code == 500
    assert response.json() == {"error": "tool_failure", "detail": "invalid notebook url"}
    assert listing.json()["owned"] == []


def test_unreachable_tool_degrades_to_not_found(api_headers) -> None:
    transport = InMemoryToolTransport(open_error=FileNotFoundError("node"))
    app = create_app(
        tool_client_factory=lambda: ToolClient(transport, timeout_seconds=1.0),
        chat_backend_factory=FakeChatBackend,
    )
    with TestClient(app) as client:
        response = client.post("/v1/research/ask", json={"question": "q"}, headers=api_headers)

    assert response.status_code == 200
    assert response.json()["confidence"] == "not_found"


def test_knowledge_off_is_service_unavailable(api_headers) -> None:
    app = create_app(tool_client_factory=lambda: None, chat_backend_factory=FakeChatBackend)
    with TestClient(app) as client:
        response = client.post("/v1/research/ask", json={"question": "q"}, headers=api_headers)

    assert response.status_code == 503
    assert response.json()["error"] == "configuration_error"
