"""Answer and source shapes returned by the knowledge adapter."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

Confidence = Literal["high", "medium", "low", "not_found"]


class Citation(BaseModel):
    """One quoted passage backing an answer. Duplicates are allowed."""

    source: str
    quote: str
    location: Optional[str] = None


class ToolAnswer(BaseModel):
    """Confidence-scored answer from the knowledge tool.

    `confidence` is `not_found` iff the lookup failed, timed out or came back
    empty; `high` iff at least one citation is present; otherwise `medium`.
    """

    answer_text: str
    citations: list[Citation] = Field(default_factory=list)
    confidence: Confidence
    follow_ups: Optional[list[str]] = None

    @property
    def found(self) -> bool:
        return self.confidence != "not_found"


class SourceMeta(BaseModel):
    """Metadata sent when registering a new knowledge source."""

    name: str
    subject: Optional[str] = None
    description: Optional[str] = None
    topics: Optional[list[str]] = None


class SourceEntry(BaseModel):
    id: str
    url: str
    name: str
    description: Optional[str] = None
    topics: Optional[list[str]] = None


class VerificationResult(BaseModel):
    grounded: bool
    answer_text: str
    citations: list[Citation] = Field(default_factory=list)
