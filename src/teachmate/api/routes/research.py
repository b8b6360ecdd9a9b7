"""Research endpoints: grounded questions, claim verification and notebook management."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, status

from teachmate.api.dependencies import (
    authorized_source_ref,
    get_knowledge_adapter,
    get_notebook_registry,
    source_ref,
)
from teachmate.api.schemas import (
    AskRequest,
    CreateNotebookRequest,
    ErrorResponse,
    NotebookListResponse,
    NotebookResponse,
    ShareRequest,
    ShareResponse,
    StudentAskRequest,
    UnshareResponse,
    VerifyRequest,
)
from teachmate.backends.protocols import NotebookAccessStore
from teachmate.errors import AccessDeniedError, ValidationError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.knowledge.models import SourceMeta, ToolAnswer, VerificationResult
from teachmate.observability.logging import get_logger

router = APIRouter(
    prefix="/v1/research",
    tags=["research"],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
logger = get_logger(__name__)


@router.post("/ask", response_model=ToolAnswer)
async def ask_question(
    body: AskRequest,
    adapter: KnowledgeQueryAdapter = Depends(get_knowledge_adapter),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> ToolAnswer:
    """Ask a question against the knowledge tool, optionally scoped to one notebook."""
    source_id = None
    if body.notebook_id:
        if body.teacher_id:
            source_id = await authorized_source_ref(registry, body.notebook_id, body.teacher_id)
        else:
            source_id = await source_ref(registry, body.notebook_id)
    return await adapter.query(body.question, source_id=source_id)


@router.post("/verify", response_model=VerificationResult)
async def verify_content(
    body: VerifyRequest,
    adapter: KnowledgeQueryAdapter = Depends(get_knowledge_adapter),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> VerificationResult:
    source_id = await source_ref(registry, body.notebook_id)
    return await adapter.verify(body.content, source_id)


@router.get("/notebooks", response_model=NotebookListResponse)
async def list_notebooks(
    teacher_id: str | None = Query(None),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> NotebookListResponse:
    """Notebooks the teacher owns and notebooks shared with them."""
    if not teacher_id:
        raise ValidationError("teacher_id is required")
    owned = await registry.find_owned(teacher_id)
    shared = await registry.find_shared_with(teacher_id)
    return NotebookListResponse(
        owned=[NotebookResponse(**asdict(nb)) for nb in owned],
        shared=[NotebookResponse(**asdict(nb)) for nb in shared],
    )


@router.post(
    "/notebooks", response_model=NotebookResponse, status_code=status.HTTP_201_CREATED
)
async def create_notebook(
    body: CreateNotebookRequest,
    adapter: KnowledgeQueryAdapter = Depends(get_knowledge_adapter),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> NotebookResponse:
    """Create the source in the knowledge tool, then register it for the owner.

    Tool errors propagate so a half-registered notebook is never recorded.
    """
    description = body.description or f"{body.title} - {body.subject or 'General'}"
    notebook_ref = await adapter.create_source(
        body.url,
        SourceMeta(
            name=body.title,
            subject=body.subject,
            description=description,
            topics=body.tags or None,
        ),
    )
    record = await registry.register(
        {
            "notebook_ref": notebook_ref,
            "url": body.url,
            "title": body.title,
            "owner_id": body.owner_id,
            "description": body.description,
            "subject": body.subject,
            "grade_level": body.grade_level,
            "visibility": body.visibility,
            "tags": body.tags,
        }
    )
    logger.info("notebook_created", notebook_id=record.id, notebook_ref=notebook_ref)
    return NotebookResponse(**asdict(record))


@router.post("/notebooks/{notebook_id}/share", response_model=ShareResponse)
async def share_notebook(
    notebook_id: str,
    body: ShareRequest,
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> ShareResponse:
    if await registry.access_level(notebook_id, body.shared_by_id) != "owner":
        raise AccessDeniedError("Only the notebook owner can share it")
    await registry.grant_access(notebook_id, body.target_id, body.role, body.shared_by_id)
    return ShareResponse(shared=True)


@router.delete("/notebooks/{notebook_id}/share/{target_id}", response_model=UnshareResponse)
async def unshare_notebook(
    notebook_id: str,
    target_id: str,
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> UnshareResponse:
    await registry.revoke_access(notebook_id, target_id)
    return UnshareResponse(unshared=True)


@router.post("/student/ask", response_model=ToolAnswer)
async def student_ask(
    body: StudentAskRequest,
    adapter: KnowledgeQueryAdapter = Depends(get_knowledge_adapter),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> ToolAnswer:
    """Student question, only against a notebook the student can read."""
    source_id = await authorized_source_ref(registry, body.notebook_id, body.student_id)
    return await adapter.query(body.question, source_id=source_id)
