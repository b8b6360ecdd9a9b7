"""Teacher assistant chat endpoint."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from teachmate.agents.classifier import message_text
from teachmate.api.dependencies import authorized_source_ref, get_notebook_registry, get_workflow
from teachmate.api.schemas import (
    AnalogyResponse,
    ErrorResponse,
    TeacherChatRequest,
    TeacherChatResponse,
)
from teachmate.backends.protocols import NotebookAccessStore
from teachmate.observability.logging import get_logger
from teachmate.workflows.langgraph.graph import WorkflowGraph
from teachmate.workflows.langgraph.nodes import SOURCE_CONTEXT_KEY
from teachmate.workflows.langgraph.state import new_conversation

router = APIRouter(prefix="/v1/chat", tags=["chat"])
logger = get_logger(__name__)


@router.post(
    "/teacher",
    response_model=TeacherChatResponse,
    responses={403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_with_teacher_assistant(
    body: TeacherChatRequest,
    workflow: WorkflowGraph = Depends(get_workflow),
    registry: NotebookAccessStore = Depends(get_notebook_registry),
) -> TeacherChatResponse:
    """Run one message through the classify/branch/respond workflow.

    A notebook pinned in ``class_context`` must be readable by the teacher; it
    is swapped for the knowledge tool's id before the run.
    """
    context = dict(body.class_context)
    notebook_id = context.get(SOURCE_CONTEXT_KEY)
    if notebook_id:
        context[SOURCE_CONTEXT_KEY] = await authorized_source_ref(
            registry, str(notebook_id), body.teacher_id
        )

    state = new_conversation(
        [{"role": "user", "content": body.message}],
        subject_id=body.teacher_id,
        context=context,
    )
    result = await workflow.run(state)

    messages = result["messages"]
    response = message_text(messages[-1]) if messages else ""
    analogy = result["analogy"]
    logger.info("teacher_chat_answered", teacher_id=body.teacher_id, intent=result["intent"].value)
    return TeacherChatResponse(
        response=response,
        intent=result["intent"].value,
        tool_answer=result["tool_answer"],
        analogy=AnalogyResponse(**asdict(analogy)) if analogy is not None else None,
    )
