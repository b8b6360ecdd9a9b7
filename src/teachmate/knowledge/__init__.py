"""Knowledge-source lookups with confidence-scored answers."""

from teachmate.knowledge.adapter import (
    KnowledgeQueryAdapter,
    derive_confidence,
    normalize_answer,
    not_found_answer,
)
from teachmate.knowledge.models import (
    Citation,
    Confidence,
    SourceEntry,
    SourceMeta,
    ToolAnswer,
    VerificationResult,
)

__all__ = [
    "Citation",
    "Confidence",
    "KnowledgeQueryAdapter",
    "SourceEntry",
    "SourceMeta",
    "ToolAnswer",
    "VerificationResult",
    "derive_confidence",
    "normalize_answer",
    "not_found_answer",
]
