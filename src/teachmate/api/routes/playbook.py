"""Playbook endpoints: curriculum templates and coaching tips."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Query, Request, status
from fastapi.responses import JSONResponse

from teachmate.api.schemas import (
    ErrorResponse,
    TemplateDetail,
    TemplateSummary,
    TemplateValidationResponse,
)
from teachmate.errors import NotFoundError
from teachmate.playbook import (
    CopilotTip,
    PlaybookTemplate,
    assessment_guidance,
    get_template,
    ingestion_tips,
    list_templates,
    personalization_hints,
    research_tips,
    review_checklist,
    validate_content,
)
from teachmate.playbook.copilot import AssessmentType, SourceType

router = APIRouter(
    prefix="/v1/playbook",
    tags=["playbook"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


def _template_or_404(template_type: str) -> PlaybookTemplate:
    template = get_template(template_type)
    if template is None:
        raise NotFoundError(f"Template not found: {template_type}")
    return template


@router.get("/templates", response_model=list[TemplateSummary])
async def get_templates() -> list[dict[str, str]]:
    return list_templates()


@router.get("/templates/{template_type}", response_model=TemplateDetail)
async def get_template_detail(template_type: str) -> TemplateDetail:
    """Template metadata; the document model itself stays server-side."""
    template = _template_or_404(template_type)
    return TemplateDetail(
        type=template.type,
        name=template.name,
        description=template.description,
        default_content=template.default_content,
        ai_fillable_fields=template.ai_fillable_fields,
    )


@router.post(
    "/templates/{template_type}/validate",
    response_model=TemplateValidationResponse,
    responses={400: {"model": TemplateValidationResponse}},
)
async def validate_template_content(
    template_type: str,
    content: Any = Body(...),
) -> Any:
    """Validate a draft document; 400 with per-field errors when it does not fit."""
    result = validate_content(_template_or_404(template_type), content)
    if not result.valid:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=asdict(result))
    return TemplateValidationResponse(valid=True)


@router.get("/tips/ingestion", response_model=list[CopilotTip])
async def get_ingestion_tips(source_type: SourceType = Query("PDF")) -> list[CopilotTip]:
    return ingestion_tips(source_type)


@router.get("/tips/review", response_model=list[CopilotTip])
async def get_review_checklist(grade_level: int = Query(8)) -> list[CopilotTip]:
    return review_checklist(grade_level)


@router.get("/tips/assessment", response_model=list[CopilotTip])
async def get_assessment_guidance(
    assessment_type: AssessmentType = Query("Quiz", alias="type"),
) -> list[CopilotTip]:
    return assessment_guidance(assessment_type)


@router.get("/tips/personalization", response_model=list[CopilotTip])
async def get_personalization_hints(student_count: int = Query(25, ge=0)) -> list[CopilotTip]:
    return personalization_hints(student_count)


@router.get("/tips/research", response_model=list[CopilotTip])
async def get_research_tips(request: Request) -> list[CopilotTip]:
    tool_client = getattr(request.app.state, "tool_client", None)
    return research_tips(tool_client is not None and tool_client.is_connected)
