"""Curriculum playbook templates.

Each template pairs a document model with the starter content a teacher
begins from and the fields the assistant is allowed to draft. Documents use
the camelCase keys teachers' tooling already exchanges (``academicYear``,
``driftBufferWeeks``); the models accept either spelling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

__all__ = [
    "TEMPLATES",
    "PlaybookTemplate",
    "TemplateValidation",
    "get_template",
    "list_templates",
    "validate_content",
]


class PlaybookDocument(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Semester Blueprint
class Milestone(PlaybookDocument):
    week: float
    topic: str
    type: Literal["Instruction", "Review", "Exam", "Project", "Break"]
    standards: List[str]


class SemesterBlueprint(PlaybookDocument):
    title: str
    academic_year: str
    subject: str
    grade_level: str
    start_date: str
    end_date: str
    total_weeks: float
    milestones: List[Milestone]
    holidays: List[str]
    drift_buffer_weeks: float = 2


# Module Design Doc
class AssessmentStrategy(PlaybookDocument):
    formative_count: float
    summative_type: Literal["Quiz", "BossBattle", "Project"]
    rubric_id: Optional[str] = None


class ModuleDesignDoc(PlaybookDocument):
    module_id: str
    title: str
    duration_weeks: float
    learning_objectives: List[str]
    key_concepts: List[str]
    learning_modes: List[Literal["Text", "Comic", "Podcast", "Video", "Quest", "Lab"]]
    assessment_strategy: AssessmentStrategy
    teacher_cameo_idea: Optional[str] = None


# Lesson Content Pack
class ComicPanel(PlaybookDocument):
    panel_id: float
    description: str
    dialogue: str


class TranscriptLine(PlaybookDocument):
    speaker: str
    text: str


class PodcastScript(PlaybookDocument):
    host1: str
    host2: str
    transcript: List[TranscriptLine]


class MindMapNode(PlaybookDocument):
    id: str
    label: str
    parent_id: Optional[str] = None


class Flashcard(PlaybookDocument):
    front: str
    back: str


class LessonContentPack(PlaybookDocument):
    module_id: str
    lesson_text: str
    comics: Optional[List[ComicPanel]] = None
    podcast_script: Optional[PodcastScript] = None
    mind_map_nodes: Optional[List[MindMapNode]] = None
    flashcards: Optional[List[Flashcard]] = None


# Assessment Suite
class QuizQuestion(PlaybookDocument):
    question: str
    options: List[str]
    correct_index: float
    explanation: str


class Quiz(PlaybookDocument):
    title: str
    questions: List[QuizQuestion]


class BossBattle(PlaybookDocument):
    title: str
    scenario: str
    multiple_choice_part: List[Any]
    open_response_part: List[str]
    rubric: Dict[str, str]


class AssessmentSuite(PlaybookDocument):
    module_id: str
    quizzes: List[Quiz]
    boss_battle: BossBattle
    feynman_prompt: str


# Quest Design
class QuestRewards(PlaybookDocument):
    xp: float
    items: List[str]
    badges: List[str]


class QuestStep(PlaybookDocument):
    step_id: float
    description: str
    unlock_condition: str


class QuestDesign(PlaybookDocument):
    title: str
    narrative_hook: str
    objectives: List[str]
    rewards: QuestRewards
    steps: List[QuestStep]


# Verification Checklist (traffic light)
class ChecklistFlag(PlaybookDocument):
    severity: Literal["Critical", "Warning", "Info"]
    category: Literal["Worldview", "Pedagogy", "Accuracy", "Safety"]
    description: str
    location: str
    resolved: bool


class VerificationChecklist(PlaybookDocument):
    module_id: str
    status: Literal["Red", "Yellow", "Green"]
    flags: List[ChecklistFlag]
    teacher_signoff: bool
    signoff_date: Optional[str] = None


@dataclass(frozen=True)
class PlaybookTemplate:
    type: str
    name: str
    description: str
    # None accepts any content.
    model: Optional[Type[PlaybookDocument]]
    default_content: Dict[str, Any] = field(default_factory=dict)
    ai_fillable_fields: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateValidation:
    valid: bool
    errors: List[Dict[str, Any]] = field(default_factory=list)


TEMPLATES: Dict[str, PlaybookTemplate] = {
    t.type: t
    for t in (
        PlaybookTemplate(
            type="SemesterBlueprint",
            name="Semester Blueprint",
            description="Full-year plan with milestones and standards",
            model=SemesterBlueprint,
            default_content={"totalWeeks": 36, "milestones": []},
            ai_fillable_fields=["milestones", "standards"],
        ),
        PlaybookTemplate(
            type="ModuleDesignDoc",
            name="Module Design Document",
            description="Unit-level planning and objectives",
            model=ModuleDesignDoc,
            default_content={"durationWeeks": 1, "learningModes": ["Text", "Podcast"]},
            ai_fillable_fields=["learningObjectives", "keyConcepts", "teacherCameoIdea"],
        ),
        PlaybookTemplate(
            type="LessonContentPack",
            name="Lesson Content Pack",
            description="Multimodal content generation specs",
            model=LessonContentPack,
            ai_fillable_fields=["lessonText", "comics", "podcastScript", "mindMapNodes", "flashcards"],
        ),
        PlaybookTemplate(
            type="AssessmentSuite",
            name="Assessment Suite",
            description="Quizzes, tests, and Feynman prompts",
            model=AssessmentSuite,
            ai_fillable_fields=["quizzes", "bossBattle", "feynmanPrompt"],
        ),
        PlaybookTemplate(
            type="QuestDesign",
            name="Quest Design",
            description="Gamified narrative layer",
            model=QuestDesign,
            default_content={"rewards": {"xp": 100, "items": [], "badges": []}},
            ai_fillable_fields=["narrativeHook", "steps", "rewards"],
        ),
        PlaybookTemplate(
            type="ProgressReportTemplate",
            name="Progress Report",
            description="Student mastery digest",
            model=None,
        ),
        PlaybookTemplate(
            type="VerificationChecklist",
            name="Verification Checklist",
            description="Compliance and safety review",
            model=VerificationChecklist,
            default_content={"status": "Red", "flags": [], "teacherSignoff": False},
            ai_fillable_fields=["flags", "status"],
        ),
    )
}


def get_template(template_type: str) -> PlaybookTemplate | None:
    return TEMPLATES.get(template_type)


def list_templates() -> list[dict[str, str]]:
    """Summaries in registry order."""
    return [{"type": t.type, "name": t.name, "description": t.description} for t in TEMPLATES.values()]


def validate_content(template: PlaybookTemplate, content: Any) -> TemplateValidation:
    """Check a draft document against its template's model.

    Errors are pydantic's, with ``loc`` in the document's own key spelling.
    """
    if template.model is None:
        return TemplateValidation(valid=True)
    try:
        template.model.model_validate(content)
    except PydanticValidationError as exc:
        return TemplateValidation(
            valid=False,
            errors=[
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors(include_url=False)
            ],
        )
    return TemplateValidation(valid=True)
