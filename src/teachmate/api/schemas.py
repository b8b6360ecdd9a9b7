"""Request and response models for OpenAPI."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from teachmate.knowledge.models import ToolAnswer


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Machine-readable error code")
    detail: Optional[str | Dict[str, Any] | List[Any]] = Field(
        None, description="Human-readable or structured error detail"
    )


class HealthResponse(BaseModel):
    status: str
    version: str
    degraded_mode: bool = False
    provider_modes: Dict[str, str] = Field(default_factory=dict)
    knowledge_connected: Optional[bool] = None


# Research


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)
    notebook_id: Optional[str] = None
    teacher_id: Optional[str] = None


class StudentAskRequest(BaseModel):
    question: str = Field(..., min_length=1)
    notebook_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)


class VerifyRequest(BaseModel):
    content: str = Field(..., min_length=1)
    notebook_id: str = Field(..., min_length=1)


class CreateNotebookRequest(BaseModel):
    url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    description: Optional[str] = None
    visibility: Literal["private", "public"] = "private"
    tags: List[str] = Field(default_factory=list)


class NotebookResponse(BaseModel):
    id: str
    notebook_ref: str
    url: str
    title: str
    owner_id: str
    description: Optional[str] = None
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    visibility: str = "private"
    tags: List[str] = Field(default_factory=list)


class NotebookListResponse(BaseModel):
    owned: List[NotebookResponse] = Field(default_factory=list)
    shared: List[NotebookResponse] = Field(default_factory=list)


class ShareRequest(BaseModel):
    target_id: str = Field(..., min_length=1)
    shared_by_id: str = Field(..., min_length=1)
    role: Literal["contributor", "reader"] = "reader"


class ShareResponse(BaseModel):
    shared: bool = True


class UnshareResponse(BaseModel):
    unshared: bool = True


# Chat


class TeacherChatRequest(BaseModel):
    teacher_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    class_context: Dict[str, Any] = Field(default_factory=dict)


class AnalogyResponse(BaseModel):
    topic: str
    verse: str
    story: str
    hook: str


class TeacherChatResponse(BaseModel):
    response: str
    intent: str
    tool_answer: Optional[ToolAnswer] = None
    analogy: Optional[AnalogyResponse] = None


# Playbook


class TemplateSummary(BaseModel):
    type: str
    name: str
    description: str


class TemplateDetail(TemplateSummary):
    default_content: Dict[str, Any] = Field(default_factory=dict)
    ai_fillable_fields: List[str] = Field(default_factory=list)


class TemplateValidationResponse(BaseModel):
    valid: bool
    errors: List[Dict[str, Any]] = Field(default_factory=list)
