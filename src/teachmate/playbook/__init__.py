"""Curriculum playbook templates and coaching tips."""

from teachmate.playbook.copilot import (
    CopilotTip,
    assessment_guidance,
    ingestion_tips,
    personalization_hints,
    research_tips,
    review_checklist,
)
from teachmate.playbook.templates import (
    TEMPLATES,
    PlaybookTemplate,
    TemplateValidation,
    get_template,
    list_templates,
    validate_content,
)

__all__ = [
    "TEMPLATES",
    "CopilotTip",
    "PlaybookTemplate",
    "TemplateValidation",
    "assessment_guidance",
    "get_template",
    "ingestion_tips",
    "list_templates",
    "personalization_hints",
    "research_tips",
    "review_checklist",
    "validate_content",
]
