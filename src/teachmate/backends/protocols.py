"""Protocol interfaces for external collaborators.

These are intentionally small: the workflow and the API depend on these
shapes, never on vendor SDKs or storage engines, so every collaborator can be
swapped for a deterministic stub in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

ChatMessage = dict[str, Any]
AccessLevel = Literal["owner", "contributor", "reader", "none"]
ShareRole = Literal["contributor", "reader"]


@dataclass(frozen=True)
class AnalogyRecord:
    topic: str
    verse: str
    story: str
    hook: str


@dataclass
class NotebookRecord:
    id: str
    notebook_ref: str
    url: str
    title: str
    owner_id: str
    description: str | None = None
    subject: str | None = None
    grade_level: str | None = None
    visibility: Literal["private", "public"] = "private"
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NotebookShare:
    notebook_id: str
    grantee_id: str
    role: ShareRole
    grantor_id: str


class ChatBackend(Protocol):
    """Text-generation collaborator: full history in, one message out."""

    async def generate(self, messages: list[ChatMessage]) -> ChatMessage: ...


class AnalogyLookup(Protocol):
    """Topic-keyed lookup that always returns a record."""

    def lookup(self, topic: str) -> AnalogyRecord: ...


class NotebookAccessStore(Protocol):
    """Persistence and access control for registered notebooks."""

    async def find_by_id(self, notebook_id: str) -> NotebookRecord | None: ...

    async def find_owned(self, owner_id: str) -> list[NotebookRecord]: ...

    async def find_shared_with(self, user_id: str) -> list[NotebookRecord]: ...

    async def register(self, meta: dict[str, Any]) -> NotebookRecord: ...

    async def grant_access(
        self, notebook_id: str, grantee_id: str, role: ShareRole, grantor_id: str
    ) -> NotebookShare: ...

    async def revoke_access(self, notebook_id: str, grantee_id: str) -> int: ...

    async def can_access(self, notebook_id: str, user_id: str) -> bool: ...

    async def access_level(self, notebook_id: str, user_id: str) -> AccessLevel: ...
