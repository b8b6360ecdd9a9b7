"""Topic-keyed Bible analogy lookup."""

from __future__ import annotations

from typing import Sequence

from teachmate.backends.protocols import AnalogyRecord

DEFAULT_ANALOGY = AnalogyRecord(
    topic="general",
    verse="Proverbs 3:5-6",
    story="Trusting in the Lord",
    hook="Trust in the Lord with all your heart...",
)

ANALOGIES: tuple[AnalogyRecord, ...] = (
    AnalogyRecord(
        topic="grit",
        verse="Galatians 6:9",
        story="Nehemiah rebuilding the wall",
        hook="Let us not become weary in doing good...",
    ),
    AnalogyRecord(
        topic="resilience",
        verse="James 1:2-4",
        story="Job's perseverance",
        hook="Consider it pure joy when you face trials...",
    ),
    AnalogyRecord(
        topic="wisdom",
        verse="James 1:5",
        story="Solomon asking for wisdom",
        hook="If any of you lacks wisdom, let him ask God...",
    ),
)


class StaticAnalogyLookup:
    """First record whose topic appears in the text, else the default record."""

    def __init__(
        self,
        records: Sequence[AnalogyRecord] = ANALOGIES,
        default: AnalogyRecord = DEFAULT_ANALOGY,
    ) -> None:
        self._records = tuple(records)
        self._default = default

    def lookup(self, topic: str) -> AnalogyRecord:
        lowered = (topic or "").lower()
        for record in self._records:
            if record.topic in lowered:
                return record
        return self._default
