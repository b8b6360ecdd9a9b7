"""Prompt assembly for the respond step."""

from __future__ import annotations

import json
from typing import Any, Mapping

from teachmate.backends.protocols import AnalogyRecord
from teachmate.knowledge.models import ToolAnswer

ROLE_PREAMBLE = """You are the Teacher Personal Assistant, an efficiency-first companion for educators.
Unlike the student tutor, your goal is to be DIRECT, CONCISE, and OPERATIONAL.
Provide drafts, summaries, and insights immediately."""

TASK_LINE = "TASK: Help the teacher manage their classroom and student progress."


def format_citations(answer: ToolAnswer) -> str:
    lines = []
    for index, citation in enumerate(answer.citations, start=1):
        line = f"[{index}] {citation.source}: \"{citation.quote}\""
        if citation.location:
            line += f" ({citation.location})"
        lines.append(line)
    return "\n".join(lines)


def build_system_prompt(
    context: Mapping[str, Any] | None,
    tool_answer: ToolAnswer | None = None,
    analogy: AnalogyRecord | None = None,
) -> str:
    """Role preamble + class context, then source material and analogy when present."""
    sections = [
        ROLE_PREAMBLE,
        f"CLASS CONTEXT:\n{json.dumps(dict(context or {}), default=str, sort_keys=True)}",
    ]
    if tool_answer is not None:
        source_block = f"SOURCE MATERIAL (confidence: {tool_answer.confidence}):\n{tool_answer.answer_text}"
        citations = format_citations(tool_answer)
        if citations:
            source_block += f"\n\nCITATIONS:\n{citations}"
        sections.append(source_block)
    if analogy is not None:
        sections.append(
            "ANALOGY:\n"
            f"Topic: {analogy.topic}\nVerse: {analogy.verse}\n"
            f"Story: {analogy.story}\nHook: {analogy.hook}"
        )
    sections.append(TASK_LINE)
    return "\n\n".join(sections)
