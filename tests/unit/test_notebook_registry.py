"""Tests for the in-memory notebook registry access rules."""

from __future__ import annotations

import pytest

from teachmate.errors import ValidationError
from teachmate.storage import InMemoryNotebookRegistry


def _meta(**overrides):  # type: ignore[no-untyped-def]
    meta = {
        "notebook_ref": "nb-ref-1",
        "url": "https://notebooklm.google.com/notebook/1",
        "title": "Algebra I",
        "owner_id": "teacher-a",
        "subject": "math",
    }
    meta.update(overrides)
    return meta


@pytest.mark.anyio
async def test_register_and_find_owned() -> None:
    registry = InMemoryNotebookRegistry()

    record = await registry.register(_meta())

    assert record.id
    assert record.visibility == "private"
    assert await registry.find_owned("teacher-a") == [record]
    assert await registry.find_owned("teacher-b") == []
    assert await registry.find_by_id(record.id) == record


@pytest.mark.anyio
async def test_register_requires_core_fields() -> None:
    with pytest.raises(ValidationError, match="owner_id"):
        await InMemoryNotebookRegistry().register(_meta(owner_id=""))


@pytest.mark.anyio
async def test_access_levels() -> None:
    registry = InMemoryNotebookRegistry()
    private = await registry.register(_meta())
    public = await registry.register(_meta(notebook_ref="nb-ref-2", visibility="public"))
    await registry.grant_access(private.id, "teacher-b", "contributor", "teacher-a")

    assert await registry.access_level(private.id, "teacher-a") == "owner"
    assert await registry.access_level(private.id, "teacher-b") == "contributor"
    assert await registry.access_level(private.id, "student-1") == "none"
    assert await registry.access_level(public.id, "student-1") == "reader"
    assert await registry.access_level("missing", "teacher-a") == "none"

    assert await registry.can_access(private.id, "teacher-b")
    assert await registry.can_access(public.id, "student-1")
    assert not await registry.can_access(private.id, "student-1")


@pytest.mark.anyio
async def test_share_then_revoke() -> None:
    registry = InMemoryNotebookRegistry()
    record = await registry.register(_meta())

    share = await registry.grant_access(record.id, "student-1", "reader", "teacher-a")
    assert share.role == "reader"
    assert await registry.find_shared_with("student-1") == [record]

    assert await registry.revoke_access(record.id, "student-1") == 1
    assert await registry.revoke_access(record.id, "student-1") == 0
    assert await registry.find_shared_with("student-1") == []
    assert not await registry.can_access(record.id, "student-1")


@pytest.mark.anyio
async def test_regrant_replaces_role() -> None:
    registry = InMemoryNotebookRegistry()
    record = await registry.register(_meta())

    await registry.grant_access(record.id, "teacher-b", "reader", "teacher-a")
    await registry.grant_access(record.id, "teacher-b", "contributor", "teacher-a")

    assert await registry.access_level(record.id, "teacher-b") == "contributor"
    assert await registry.find_shared_with("teacher-b") == [record]


@pytest.mark.anyio
async def test_grant_on_unknown_notebook_fails() -> None:
    with pytest.raises(ValidationError):
        await InMemoryNotebookRegistry().grant_access("missing", "b", "reader", "a")
