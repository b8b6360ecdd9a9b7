"""In-memory notebook registry with owner/share/public access rules."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from teachmate.backends.protocols import AccessLevel, NotebookRecord, NotebookShare, ShareRole
from teachmate.errors import ValidationError
from teachmate.observability.logging import get_logger

logger = get_logger(__name__)

__all__ = ["InMemoryNotebookRegistry", "REQUIRED_FIELDS"]

REQUIRED_FIELDS = ("notebook_ref", "url", "title", "owner_id")
SHARE_ROLES: tuple[ShareRole, ...] = ("contributor", "reader")


class InMemoryNotebookRegistry:
    """Process-local NotebookAccessStore.

    Records and shares live in dicts keyed by notebook id; nothing survives a
    restart.
    """

    def __init__(self) -> None:
        self._notebooks: dict[str, NotebookRecord] = {}
        # notebook_id -> grantee_id -> share
        self._shares: dict[str, dict[str, NotebookShare]] = {}

    async def find_by_id(self, notebook_id: str) -> NotebookRecord | None:
        return self._notebooks.get(notebook_id)

    async def find_owned(self, owner_id: str) -> list[NotebookRecord]:
        return [nb for nb in self._notebooks.values() if nb.owner_id == owner_id]

    async def find_shared_with(self, user_id: str) -> list[NotebookRecord]:
        return [
            self._notebooks[notebook_id]
            for notebook_id, shares in self._shares.items()
            if user_id in shares and notebook_id in self._notebooks
        ]

    async def register(self, meta: dict[str, Any]) -> NotebookRecord:
        missing = [name for name in REQUIRED_FIELDS if not meta.get(name)]
        if missing:
            raise ValidationError(f"Missing notebook fields: {', '.join(missing)}")

        record = NotebookRecord(
            id=str(uuid4()),
            notebook_ref=str(meta["notebook_ref"]),
            url=str(meta["url"]),
            title=str(meta["title"]),
            owner_id=str(meta["owner_id"]),
            description=meta.get("description"),
            subject=meta.get("subject"),
            grade_level=meta.get("grade_level"),
            visibility=meta.get("visibility") or "private",
            tags=list(meta.get("tags") or []),
        )
        self._notebooks[record.id] = record
        logger.info("notebook_registered", notebook_id=record.id, owner_id=record.owner_id)
        return record

    async def grant_access(
        self, notebook_id: str, grantee_id: str, role: ShareRole, grantor_id: str
    ) -> NotebookShare:
        if notebook_id not in self._notebooks:
            raise ValidationError(f"Unknown notebook: {notebook_id}")
        if role not in SHARE_ROLES:
            raise ValidationError(f"Invalid share role: {role}")

        share = NotebookShare(
            notebook_id=notebook_id, grantee_id=grantee_id, role=role, grantor_id=grantor_id
        )
        self._shares.setdefault(notebook_id, {})[grantee_id] = share
        logger.info("notebook_shared", notebook_id=notebook_id, grantee_id=grantee_id, role=role)
        return share

    async def revoke_access(self, notebook_id: str, grantee_id: str) -> int:
        shares = self._shares.get(notebook_id, {})
        removed = 1 if shares.pop(grantee_id, None) is not None else 0
        logger.info("notebook_unshared", notebook_id=notebook_id, grantee_id=grantee_id, removed=removed)
        return removed

    async def can_access(self, notebook_id: str, user_id: str) -> bool:
        return await self.access_level(notebook_id, user_id) != "none"

    async def access_level(self, notebook_id: str, user_id: str) -> AccessLevel:
        notebook = self._notebooks.get(notebook_id)
        if notebook is None:
            return "none"
        if notebook.owner_id == user_id:
            return "owner"
        share = self._shares.get(notebook_id, {}).get(user_id)
        if share is not None:
            return share.role
        if notebook.visibility == "public":
            return "reader"
        return "none"
