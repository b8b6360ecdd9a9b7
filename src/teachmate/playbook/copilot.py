"""Canned coaching tips shown next to the playbook editor."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

__all__ = [
    "CopilotTip",
    "assessment_guidance",
    "ingestion_tips",
    "personalization_hints",
    "research_tips",
    "review_checklist",
]

SourceType = Literal["PDF", "EPUB", "Web"]
AssessmentType = Literal["Quiz", "BossBattle"]


class CopilotTip(BaseModel):
    id: str
    category: Literal["Ingestion", "Review", "Assessment", "Personalization", "Compliance", "Research"]
    title: str
    content: str
    priority: Literal["Critical", "High", "Medium", "Low"]
    actionable: Optional[bool] = None


def ingestion_tips(source_type: SourceType = "PDF") -> list[CopilotTip]:
    tips = [
        CopilotTip(
            id="ingest-quality",
            category="Ingestion",
            title="Source Quality Matters",
            content=(
                "Ensure your PDF is a high-quality digital export, not a scan. OCR errors in "
                'scans can lead to "hallucinated" curriculum concepts.'
            ),
            priority="High",
        ),
        CopilotTip(
            id="ingest-standards",
            category="Ingestion",
            title="Include Standards",
            content=(
                "Upload your state/national standards document alongside the textbook. This "
                "allows the assistant to map every lesson directly to a requirement."
            ),
            priority="Medium",
        ),
    ]
    if source_type == "PDF":
        tips.append(
            CopilotTip(
                id="ingest-pdf-toc",
                category="Ingestion",
                title="Check the TOC",
                content=(
                    "Verify that the Table of Contents was parsed correctly. If the chapters are "
                    "wrong, the whole semester plan will be skewed."
                ),
                priority="High",
            )
        )
    return tips


def review_checklist(grade_level: int) -> list[CopilotTip]:
    tips = [
        CopilotTip(
            id="review-preview",
            category="Review",
            title=f"Preview as Grade {grade_level}",
            content=(
                'Always use the "Student View" button before publishing. Generated content '
                "often sounds too dry or too complex."
            ),
            priority="High",
            actionable=True,
        ),
        CopilotTip(
            id="review-cameo",
            category="Review",
            title="Record a Cameo",
            content=(
                "Students engage 40% more when they see your face. Record a 30s intro video "
                "for this module."
            ),
            priority="Medium",
            actionable=True,
        ),
    ]
    if grade_level < 6:
        tips.append(
            CopilotTip(
                id="review-voice",
                category="Review",
                title="Read Aloud Check",
                content=(
                    'Read the "Comic Script" dialogue aloud. Does it sound like how an '
                    "8-year-old speaks?"
                ),
                priority="Medium",
            )
        )
    return tips


def assessment_guidance(assessment_type: AssessmentType = "Quiz") -> list[CopilotTip]:
    if assessment_type == "BossBattle":
        return [
            CopilotTip(
                id="assess-boss-summative",
                category="Assessment",
                title="Summative Only",
                content=(
                    "Boss Battles are high-stakes. Use them only for end-of-unit verification, "
                    "never for practice."
                ),
                priority="High",
            ),
            CopilotTip(
                id="assess-rubric",
                category="Assessment",
                title="Rubric Alignment",
                content=(
                    "Ensure the Boss Battle rubric matches the official exam standards exactly. "
                    'Generated rubrics can drift into "general correctness".'
                ),
                priority="Critical",
            ),
        ]
    return [
        CopilotTip(
            id="assess-quiz-mix",
            category="Assessment",
            title="80/20 Rule",
            content=(
                "Mix 80% generated questions with 20% of your own custom questions to add your "
                "specific flavor."
            ),
            priority="Low",
        )
    ]


def personalization_hints(student_count: int) -> list[CopilotTip]:
    return [
        CopilotTip(
            id="pers-roster",
            category="Personalization",
            title="Feed the Roster",
            content=(
                f'You have {student_count} students. Ensure their "Interests" are updated in the '
                "profile. The assistant uses this to pick metaphors (e.g. using Minecraft for "
                "geometry)."
            ),
            priority="High",
        ),
        CopilotTip(
            id="pers-modes",
            category="Personalization",
            title="Mode Variety",
            content=(
                "Don't overuse the \"Comic\" mode. Students need text for deep reading stamina. "
                "Use Comics for hooks, Text for depth."
            ),
            priority="Medium",
        ),
    ]


def research_tips(knowledge_connected: bool) -> list[CopilotTip]:
    """Research-branch tips; setup help is added while the knowledge tool is unreachable."""
    tips = [
        CopilotTip(
            id="research-textbook",
            category="Research",
            title="Ask Your Textbook",
            content=(
                'Mention the textbook, a chapter or "according to" in a chat message to get an '
                "answer grounded in your notebooks, with citations."
            ),
            priority="Medium",
            actionable=True,
        )
    ]
    if not knowledge_connected:
        tips.append(
            CopilotTip(
                id="research-setup",
                category="Research",
                title="Connect Your Notebooks",
                content=(
                    "The knowledge tool is not connected, so research questions are answered "
                    "without sources. Check KNOWLEDGE_PROVIDER and the tool process, then restart."
                ),
                priority="High",
                actionable=True,
            )
        )
    return tips
