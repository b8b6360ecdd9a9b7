"""Keyword intent classification for incoming teacher messages."""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from teachmate.observability.logging import get_logger

logger = get_logger("agents.classifier")


class Intent(str, Enum):
    """Branch selected for a conversational turn."""

    RESEARCH = "research"
    ANALOGY = "analogy"
    GENERAL = "general"


# The two sets are disjoint; research is checked first and wins when both match.
RESEARCH_KEYWORDS: tuple[str, ...] = (
    "textbook",
    "according to",
    "chapter",
    "cite the",
    "citation",
    "source material",
    "notebook",
    "reading passage",
)
ANALOGY_KEYWORDS: tuple[str, ...] = (
    "bible",
    "analogy",
    "scripture",
    "parable",
)


def message_text(message: Any) -> str:
    """Return the text of a message dict (or message-like object)."""
    if message is None:
        return ""
    if isinstance(message, dict):
        content = message.get("content")
    else:
        content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


def latest_message_text(messages: Sequence[Any] | None) -> str:
    """Text of the most recent message, or "" when there are none."""
    if not messages:
        return ""
    return message_text(messages[-1])


def classify_intent(
    text: str,
    *,
    research_keywords: Sequence[str] = RESEARCH_KEYWORDS,
    analogy_keywords: Sequence[str] = ANALOGY_KEYWORDS,
) -> Intent:
    """Case-insensitive substring match; no keyword at all yields GENERAL."""
    lowered = (text or "").lower()
    if any(keyword in lowered for keyword in research_keywords):
        return Intent.RESEARCH
    if any(keyword in lowered for keyword in analogy_keywords):
        return Intent.ANALOGY
    return Intent.GENERAL


__all__ = [
    "ANALOGY_KEYWORDS",
    "Intent",
    "RESEARCH_KEYWORDS",
    "classify_intent",
    "latest_message_text",
    "message_text",
]
