"""Agent building blocks: intent classification, analogy lookup, prompts."""

from teachmate.agents.analogy import ANALOGIES, DEFAULT_ANALOGY, StaticAnalogyLookup
from teachmate.agents.classifier import (
    ANALOGY_KEYWORDS,
    RESEARCH_KEYWORDS,
    Intent,
    classify_intent,
    latest_message_text,
)
from teachmate.agents.prompts import build_system_prompt, format_citations

__all__ = [
    "ANALOGIES",
    "ANALOGY_KEYWORDS",
    "DEFAULT_ANALOGY",
    "Intent",
    "RESEARCH_KEYWORDS",
    "StaticAnalogyLookup",
    "build_system_prompt",
    "classify_intent",
    "format_citations",
    "latest_message_text",
]
