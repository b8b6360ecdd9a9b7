"""LangGraph workflow graph definition and compilation."""

from __future__ import annotations

from typing import Callable, Mapping
from uuid import uuid4

import anyio
from langgraph.constants import END, START
from langgraph.graph import StateGraph

from teachmate.agents.analogy import StaticAnalogyLookup
from teachmate.agents.classifier import Intent
from teachmate.backends.protocols import AnalogyLookup, ChatBackend
from teachmate.errors import ConfigurationError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.observability.logging import get_logger, run_id_var
from teachmate.workflows.langgraph.nodes import (
    classify_node,
    make_analogy_node,
    make_research_node,
    make_respond_node,
)
from teachmate.workflows.langgraph.state import ConversationState, with_defaults

logger = get_logger(__name__)

CLASSIFY = "classify"
RESEARCH = "research"
ANALOGY = "analogy"
RESPOND = "respond"

# Branch key (the intent value) -> node that handles it.
INTENT_BRANCHES: dict[str, str] = {
    Intent.RESEARCH.value: RESEARCH,
    Intent.ANALOGY.value: ANALOGY,
    Intent.GENERAL.value: RESPOND,
}

Selector = Callable[[ConversationState], str]


def route_by_intent(state: ConversationState) -> str:
    """Branch key for the classified intent; unclassified state routes as general."""
    intent = state.get("intent") or Intent.GENERAL
    return intent.value if isinstance(intent, Intent) else str(intent)


def checked_selector(selector: Selector, branches: Mapping[str, str]) -> Selector:
    """Wrap a selector so an undeclared branch key fails the run."""

    def select(state: ConversationState) -> str:
        key = selector(state)
        if key not in branches:
            raise ConfigurationError(
                f"Branch selector returned undeclared key {key!r}; expected one of {sorted(branches)}"
            )
        return key

    return select


def validate_branches(branches: Mapping[str, str]) -> None:
    """Branch table must cover every intent and only target known nodes."""
    missing = {intent.value for intent in Intent} - set(branches)
    if missing:
        raise ConfigurationError(f"Branch table has no route for intents: {sorted(missing)}")
    unknown = set(branches.values()) - {RESEARCH, ANALOGY, RESPOND}
    if unknown:
        raise ConfigurationError(f"Branch table targets unknown nodes: {sorted(unknown)}")


class WorkflowGraph:
    """Compiled classify -> (research | analogy) -> respond pipeline.

    The graph is built and compiled once; `run` may be called concurrently
    since each run owns its own state.
    """

    def __init__(
        self,
        *,
        chat: ChatBackend,
        adapter: KnowledgeQueryAdapter | None = None,
        analogy_lookup: AnalogyLookup | None = None,
        selector: Selector = route_by_intent,
        branches: Mapping[str, str] | None = None,
    ) -> None:
        self._chat = chat
        self._adapter = adapter
        self._analogy_lookup = analogy_lookup or StaticAnalogyLookup()
        self._branches = dict(branches or INTENT_BRANCHES)
        validate_branches(self._branches)
        self._selector = checked_selector(selector, self._branches)
        self._compiled = self._build().compile()

    def _build(self) -> StateGraph:
        graph = StateGraph(ConversationState)

        graph.add_node(CLASSIFY, classify_node)
        graph.add_node(RESEARCH, make_research_node(self._adapter))
        graph.add_node(ANALOGY, make_analogy_node(self._analogy_lookup))
        graph.add_node(RESPOND, make_respond_node(self._chat))

        graph.add_edge(START, CLASSIFY)
        graph.add_conditional_edges(CLASSIFY, self._selector, self._branches)
        graph.add_edge(RESEARCH, RESPOND)
        graph.add_edge(ANALOGY, RESPOND)
        graph.add_edge(RESPOND, END)
        return graph

    async def run(self, initial: ConversationState) -> ConversationState:
        """Execute one run from caller-supplied state to the final merged state."""
        run_id = uuid4().hex
        token = run_id_var.set(run_id)
        try:
            logger.info(
                "workflow_started",
                subject_id=initial.get("subject_id"),
                messages=len(initial.get("messages") or []),
            )
            result = await self._compiled.ainvoke(dict(initial))
            final = with_defaults(result)
            logger.info(
                "workflow_completed",
                intent=final["intent"].value,
                has_tool_answer=final["tool_answer"] is not None,
                has_analogy=final["analogy"] is not None,
            )
            return final
        except Exception as exc:
            logger.error("workflow_failed", exc=str(exc), exc_type=type(exc).__name__)
            raise
        finally:
            run_id_var.reset(token)

    def run_sync(self, initial: ConversationState) -> ConversationState:
        """Blocking wrapper for callers outside an event loop."""
        return anyio.run(self.run, initial)


__all__ = [
    "ANALOGY",
    "CLASSIFY",
    "INTENT_BRANCHES",
    "RESEARCH",
    "RESPOND",
    "WorkflowGraph",
    "checked_selector",
    "route_by_intent",
    "validate_branches",
]
