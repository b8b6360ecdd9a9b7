"""LangGraph workflow nodes.

Nodes are built by small factories so their collaborators (knowledge adapter,
analogy lookup, chat backend) are bound once per graph. Every node returns a
partial state update; the executor merges it through the field reducers.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from teachmate.agents.classifier import classify_intent, latest_message_text
from teachmate.agents.prompts import build_system_prompt
from teachmate.backends.protocols import AnalogyLookup, ChatBackend
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.observability.logging import get_logger
from teachmate.workflows.langgraph.state import ConversationState

logger = get_logger(__name__)

Node = Callable[[ConversationState], Awaitable[dict[str, Any]]]

# Context key that pins research lookups to a specific notebook.
SOURCE_CONTEXT_KEY = "notebook_id"


async def classify_node(state: ConversationState) -> dict[str, Any]:
    """Label the latest message with an intent."""
    intent = classify_intent(latest_message_text(state.get("messages")))
    logger.info("intent_classified", intent=intent.value, subject_id=state.get("subject_id"))
    return {"intent": intent}


def make_research_node(adapter: KnowledgeQueryAdapter | None) -> Node:
    async def research_node(state: ConversationState) -> dict[str, Any]:
        if adapter is None or not adapter.is_available():
            logger.info("research_skipped", reason="knowledge_unavailable")
            return {"tool_answer": None}

        question = latest_message_text(state.get("messages"))
        source_id = (state.get("context") or {}).get(SOURCE_CONTEXT_KEY)
        answer = await adapter.query(question, source_id=source_id)
        logger.info(
            "research_completed",
            confidence=answer.confidence,
            citations=len(answer.citations),
        )
        return {"tool_answer": answer}

    return research_node


def make_analogy_node(lookup: AnalogyLookup) -> Node:
    async def analogy_node(state: ConversationState) -> dict[str, Any]:
        record = lookup.lookup(latest_message_text(state.get("messages")))
        logger.info("analogy_selected", topic=record.topic)
        return {"analogy": record}

    return analogy_node


def make_respond_node(chat: ChatBackend) -> Node:
    async def respond_node(state: ConversationState) -> dict[str, Any]:
        system_prompt = build_system_prompt(
            state.get("context") or {},
            tool_answer=state.get("tool_answer"),
            analogy=state.get("analogy"),
        )
        request = [{"role": "system", "content": system_prompt}, *(state.get("messages") or [])]
        reply = await chat.generate(request)
        logger.info("response_generated", chars=len(str(reply.get("content") or "")))
        return {"messages": [reply]}

    return respond_node


__all__ = [
    "Node",
    "SOURCE_CONTEXT_KEY",
    "classify_node",
    "make_analogy_node",
    "make_research_node",
    "make_respond_node",
]
