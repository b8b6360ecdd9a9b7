"""LangGraph-based conversation workflow."""

from teachmate.workflows.langgraph.graph import INTENT_BRANCHES, WorkflowGraph, route_by_intent
from teachmate.workflows.langgraph.reducers import (
    append,
    first_wins,
    replace_if_present,
    shallow_merge,
)
from teachmate.workflows.langgraph.state import (
    REDUCERS,
    ConversationState,
    new_conversation,
)

__all__ = [
    "ConversationState",
    "INTENT_BRANCHES",
    "REDUCERS",
    "WorkflowGraph",
    "append",
    "first_wins",
    "new_conversation",
    "replace_if_present",
    "route_by_intent",
    "shallow_merge",
]
