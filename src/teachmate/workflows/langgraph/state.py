"""LangGraph conversation state definition."""

from __future__ import annotations

from typing import Annotated, Any, Mapping, Sequence, TypedDict, get_type_hints

from teachmate.agents.classifier import Intent
from teachmate.backends.protocols import AnalogyRecord, ChatMessage
from teachmate.knowledge.models import ToolAnswer
from teachmate.workflows.langgraph.reducers import (
    Reducer,
    append,
    first_wins,
    replace_if_present,
    shallow_merge,
)


class ConversationState(TypedDict, total=False):
    """State threaded through one workflow run.

    Each field carries its reducer in its annotation; nodes return partial
    updates and never merge by hand.
    """

    # Caller-supplied
    messages: Annotated[list[ChatMessage], append]
    subject_id: Annotated[str, first_wins]
    context: Annotated[dict[str, Any], shallow_merge]

    # Produced by nodes
    intent: Annotated[Intent | None, replace_if_present]
    analogy: Annotated[AnalogyRecord | None, replace_if_present]
    tool_answer: Annotated[ToolAnswer | None, replace_if_present]


def field_reducers(schema: type) -> dict[str, Reducer]:
    """Return the field -> reducer mapping declared on a state schema."""
    reducers: dict[str, Reducer] = {}
    for name, hint in get_type_hints(schema, include_extras=True).items():
        metadata = getattr(hint, "__metadata__", ())
        if metadata and callable(metadata[-1]):
            reducers[name] = metadata[-1]
    return reducers


REDUCERS: dict[str, Reducer] = field_reducers(ConversationState)


def new_conversation(
    messages: Sequence[ChatMessage],
    subject_id: str,
    context: Mapping[str, Any] | None = None,
) -> ConversationState:
    """Fresh per-request state holding only the caller-supplied fields."""
    return ConversationState(
        messages=list(messages),
        subject_id=subject_id,
        context=dict(context or {}),
    )


def with_defaults(state: Mapping[str, Any]) -> ConversationState:
    """Fill fields a run never wrote with their documented defaults."""
    completed: dict[str, Any] = {
        "messages": [],
        "subject_id": "",
        "context": {},
        "analogy": None,
        "tool_answer": None,
        **state,
    }
    completed["intent"] = state.get("intent") or Intent.GENERAL
    return ConversationState(**completed)  # type: ignore[typeddict-item]


__all__ = [
    "ConversationState",
    "REDUCERS",
    "field_reducers",
    "new_conversation",
    "with_defaults",
]
