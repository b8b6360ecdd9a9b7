"""Domain operations on top of the knowledge ToolClient.

`query`, `batch_query` and `verify` are best-effort lookups: transport,
decoding and tool-reported failures all come back as a `not_found` answer
with a diagnostic text. `create_source`, `list_sources` and `select_source`
are administrative and raise instead, so a failed registration is never
mistaken for a success.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from teachmate.errors import DecodeError, ToolError, ToolFailure
from teachmate.knowledge.models import (
    Citation,
    Confidence,
    SourceEntry,
    SourceMeta,
    ToolAnswer,
    VerificationResult,
)
from teachmate.observability.logging import get_logger
from teachmate.tools.base import first_text, parse_payload
from teachmate.tools.client import ToolClient

logger = get_logger(__name__)

__all__ = [
    "ASK_QUESTION",
    "ADD_NOTEBOOK",
    "LIST_NOTEBOOKS",
    "SELECT_NOTEBOOK",
    "KnowledgeQueryAdapter",
    "derive_confidence",
    "normalize_answer",
    "not_found_answer",
]

ASK_QUESTION = "ask_question"
ADD_NOTEBOOK = "add_notebook"
LIST_NOTEBOOKS = "list_notebooks"
SELECT_NOTEBOOK = "select_notebook"

VERIFY_TEMPLATE = (
    "Verify the following claim against the source material. "
    'Is this accurate and grounded in the documents? Claim: "{claim}"'
)


def derive_confidence(citations: Sequence[Citation]) -> Confidence:
    return "high" if citations else "medium"


def not_found_answer(diagnostic: str) -> ToolAnswer:
    return ToolAnswer(
        answer_text=diagnostic or "No answer found",
        citations=[],
        confidence="not_found",
    )


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _citation(raw: Any) -> Citation:
    if not isinstance(raw, Mapping):
        raise DecodeError("Citation entry is not an object", tool_name=ASK_QUESTION)
    return Citation(
        source=str(raw.get("source") or raw.get("notebook") or ""),
        quote=str(raw.get("quote") or raw.get("text") or ""),
        location=_optional_str(raw.get("location") or raw.get("page")),
    )


def normalize_answer(payload: Mapping[str, Any]) -> ToolAnswer:
    """Map a decoded `ask_question` payload onto the canonical answer shape.

    Accepts the field-name variants different tool versions emit
    (`answer`/`response`, `source`/`notebook`, `quote`/`text`,
    `location`/`page`, `followUpSuggestions`/`suggestions`).
    """
    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise DecodeError("Reply is missing the 'data' object", tool_name=ASK_QUESTION)

    raw_citations = data.get("citations") or []
    if not isinstance(raw_citations, list):
        raise DecodeError("'citations' is not a list", tool_name=ASK_QUESTION)
    citations = [_citation(c) for c in raw_citations]

    answer_text = str(data.get("answer") or data.get("response") or "")
    if not answer_text.strip() and not citations:
        return not_found_answer("Knowledge tool returned an empty answer")

    raw_follow_ups = data.get("followUpSuggestions") or data.get("suggestions")
    follow_ups = [str(f) for f in raw_follow_ups] if isinstance(raw_follow_ups, list) else None

    return ToolAnswer(
        answer_text=answer_text,
        citations=citations,
        confidence=derive_confidence(citations),
        follow_ups=follow_ups,
    )


class KnowledgeQueryAdapter:
    """Knowledge-source operations with uniform, confidence-scored answers."""

    def __init__(self, client: ToolClient) -> None:
        self._client = client

    @property
    def client(self) -> ToolClient:
        return self._client

    def is_available(self) -> bool:
        """True iff the tool connection is established. Never connects."""
        return self._client.is_connected

    async def query(self, question: str, source_id: str | None = None) -> ToolAnswer:
        """Ask one question. Never raises; failures yield a `not_found` answer."""
        args: dict[str, Any] = {"query": question}
        if source_id:
            args["notebook_id"] = source_id
        try:
            payload = await self._client.call(ASK_QUESTION, args)
            answer = normalize_answer(payload)
        except ToolFailure as exc:
            logger.info("knowledge_query_rejected", source_id=source_id, reason=str(exc))
            return not_found_answer(str(exc) or "Query failed")
        except ToolError as exc:
            logger.warning(
                "knowledge_query_failed",
                source_id=source_id,
                exc=str(exc),
                exc_type=type(exc).__name__,
            )
            return not_found_answer(f"Knowledge tool unavailable: {exc}")

        logger.info(
            "knowledge_query_answered",
            source_id=source_id,
            confidence=answer.confidence,
            citations=len(answer.citations),
        )
        return answer

    async def batch_query(
        self, questions: Sequence[str], source_id: str | None = None
    ) -> list[ToolAnswer]:
        """Ask each question in order, one at a time. One failure never aborts the rest."""
        results: list[ToolAnswer] = []
        for question in questions:
            results.append(await self.query(question, source_id))
        return results

    async def verify(self, claim: str, source_id: str) -> VerificationResult:
        """Check a claim against a source; grounded unless the lookup came back not_found."""
        answer = await self.query(VERIFY_TEMPLATE.format(claim=claim), source_id)
        return VerificationResult(
            grounded=answer.found,
            answer_text=answer.answer_text,
            citations=answer.citations,
        )

    async def create_source(self, url: str, meta: SourceMeta) -> str:
        """Register a source with the tool and return its id.

        Raises:
            TransportError, DecodeError, ToolFailure: registration did not happen
                or its id could not be read.
        """
        payload = await self._client.call(
            ADD_NOTEBOOK,
            {
                "url": url,
                "name": meta.name,
                "description": meta.description or f"Notebook for {meta.name}",
                "topics": meta.topics or [meta.subject or "general"],
            },
        )
        data = payload.get("data")
        notebook = data.get("notebook") if isinstance(data, Mapping) else None
        source_id = notebook.get("id") if isinstance(notebook, Mapping) else None
        if not source_id:
            raise DecodeError("Reply did not include the new notebook id", tool_name=ADD_NOTEBOOK)
        logger.info("knowledge_source_created", source_id=str(source_id), name=meta.name)
        return str(source_id)

    async def list_sources(self) -> list[SourceEntry]:
        """Return the sources known to the tool, in the tool's order."""
        payload = await self._client.call(LIST_NOTEBOOKS, {})
        data = payload.get("data")
        raw_notebooks = data.get("notebooks") if isinstance(data, Mapping) else None
        if raw_notebooks is None:
            return []
        if not isinstance(raw_notebooks, list):
            raise DecodeError("'notebooks' is not a list", tool_name=LIST_NOTEBOOKS)

        entries: list[SourceEntry] = []
        for raw in raw_notebooks:
            if not isinstance(raw, Mapping):
                raise DecodeError("Notebook entry is not an object", tool_name=LIST_NOTEBOOKS)
            topics = raw.get("topics")
            entries.append(
                SourceEntry(
                    id=str(raw.get("id") or ""),
                    url=str(raw.get("url") or ""),
                    name=str(raw.get("name") or ""),
                    description=_optional_str(raw.get("description")),
                    topics=[str(t) for t in topics] if isinstance(topics, list) else None,
                )
            )
        return entries

    async def select_source(self, source_id: str) -> None:
        """Make `source_id` the tool's active source.

        The reply body is not required to be JSON; only an error envelope or an
        explicit `success: false` counts as failure.
        """
        reply = await self._client.invoke(SELECT_NOTEBOOK, {"notebook_id": source_id})
        text = first_text(reply)
        if reply.is_error:
            raise ToolFailure(text or "select_notebook failed", tool_name=SELECT_NOTEBOOK)
        if text:
            try:
                payload = parse_payload(text, SELECT_NOTEBOOK)
            except DecodeError:
                payload = {}
            if payload.get("success") is False:
                raise ToolFailure(
                    str(payload.get("error") or "select_notebook failed"),
                    tool_name=SELECT_NOTEBOOK,
                )
        logger.info("knowledge_source_selected", source_id=source_id)
