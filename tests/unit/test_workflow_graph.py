"""End-to-end tests for the classify -> branch -> respond workflow."""

from __future__ import annotations

import anyio
import pytest

from teachmate.agents.classifier import Intent
from teachmate.backends.fake import FakeChatBackend
from teachmate.errors import ConfigurationError
from teachmate.knowledge.adapter import KnowledgeQueryAdapter
from teachmate.tools.base import format_tool_success
from teachmate.tools.client import ToolClient
from teachmate.tools.fakes import InMemoryToolTransport
from teachmate.workflows.langgraph.graph import (
    INTENT_BRANCHES,
    RESPOND,
    WorkflowGraph,
    route_by_intent,
)
from teachmate.workflows.langgraph.state import new_conversation


def _ask_handler(_args):  # type: ignore[no-untyped-def]
    return format_tool_success(
        {
            "answer": "Photosynthesis turns light into chemical energy.",
            "citations": [{"source": "Biology Textbook", "quote": "light energy", "location": "ch. 4"}],
        }
    )


async def _connected_adapter() -> tuple[KnowledgeQueryAdapter, InMemoryToolTransport]:
    transport = InMemoryToolTransport(handlers={"ask_question": _ask_handler})
    client = ToolClient(transport, timeout_seconds=1.0)
    await client.connect()
    return KnowledgeQueryAdapter(client), transport


def _state(text: str, **context):  # type: ignore[no-untyped-def]
    return new_conversation([{"role": "user", "content": text}], "teacher-1", context)


@pytest.mark.anyio
async def test_research_turn_grounds_the_response() -> None:
    adapter, transport = await _connected_adapter()
    chat = FakeChatBackend(reply="Here is a grounded summary.")
    graph = WorkflowGraph(chat=chat, adapter=adapter)

    result = await graph.run(_state("What does the textbook say about photosynthesis?"))

    assert result["intent"] is Intent.RESEARCH
    assert result["tool_answer"].confidence == "high"
    assert result["analogy"] is None
    assert [m["content"] for m in result["messages"]] == [
        "What does the textbook say about photosynthesis?",
        "Here is a grounded summary.",
    ]
    assert len(transport.calls_for("ask_question")) == 1

    system_prompt = chat.calls[0][0]
    assert system_prompt["role"] == "system"
    assert "SOURCE MATERIAL (confidence: high)" in system_prompt["content"]
    assert "Biology Textbook" in system_prompt["content"]


@pytest.mark.anyio
async def test_analogy_turn_never_calls_the_tool() -> None:
    adapter, transport = await _connected_adapter()
    chat = FakeChatBackend()
    graph = WorkflowGraph(chat=chat, adapter=adapter)

    result = await graph.run(_state("Give me a Bible analogy for grit"))

    assert result["intent"] is Intent.ANALOGY
    assert result["analogy"].topic == "grit"
    assert result["analogy"].verse == "Galatians 6:9"
    assert result["tool_answer"] is None
    assert transport.calls == []
    assert "Galatians 6:9" in chat.calls[0][0]["content"]


@pytest.mark.anyio
async def test_general_turn_goes_straight_to_respond() -> None:
    adapter, transport = await _connected_adapter()
    chat = FakeChatBackend()
    graph = WorkflowGraph(chat=chat, adapter=adapter)

    result = await graph.run(_state("How should I plan tomorrow's lesson?"))

    assert result["intent"] is Intent.GENERAL
    assert result["tool_answer"] is None
    assert result["analogy"] is None
    assert transport.calls == []
    assert len(result["messages"]) == 2
    assert result["messages"][-1]["role"] == "assistant"


@pytest.mark.anyio
async def test_research_skips_when_tool_disconnected() -> None:
    transport = InMemoryToolTransport(handlers={"ask_question": _ask_handler})
    adapter = KnowledgeQueryAdapter(ToolClient(transport))
    chat = FakeChatBackend()
    graph = WorkflowGraph(chat=chat, adapter=adapter)

    result = await graph.run(_state("According to chapter 2, what is a cell?"))

    assert result["intent"] is Intent.RESEARCH
    assert result["tool_answer"] is None
    assert transport.calls == []
    assert result["messages"][-1]["content"].startswith("[fake]")
    assert "SOURCE MATERIAL" not in chat.calls[0][0]["content"]


@pytest.mark.anyio
async def test_research_skips_without_adapter() -> None:
    graph = WorkflowGraph(chat=FakeChatBackend())

    result = await graph.run(_state("Cite the textbook on fractions"))

    assert result["intent"] is Intent.RESEARCH
    assert result["tool_answer"] is None
    assert len(result["messages"]) == 2


@pytest.mark.anyio
async def test_context_notebook_scopes_the_lookup() -> None:
    adapter, transport = await _connected_adapter()
    graph = WorkflowGraph(chat=FakeChatBackend(), adapter=adapter)

    await graph.run(_state("What does the textbook say?", notebook_id="nb-42", grade="5"))

    assert transport.calls_for("ask_question") == [
        {"query": "What does the textbook say?", "notebook_id": "nb-42"}
    ]


@pytest.mark.anyio
async def test_class_context_reaches_the_prompt_and_is_preserved() -> None:
    chat = FakeChatBackend()
    graph = WorkflowGraph(chat=chat)

    result = await graph.run(_state("hello", grade="5", subject="math"))

    assert result["context"] == {"grade": "5", "subject": "math"}
    assert result["subject_id"] == "teacher-1"
    assert '"grade": "5"' in chat.calls[0][0]["content"]


@pytest.mark.anyio
async def test_history_is_sent_in_order() -> None:
    chat = FakeChatBackend()
    graph = WorkflowGraph(chat=chat)
    history = [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "reply"},
        {"role": "user", "content": "second"},
    ]

    result = await graph.run(new_conversation(history, "teacher-1"))

    assert [m["content"] for m in chat.calls[0][1:]] == ["first", "reply", "second"]
    assert [m["content"] for m in result["messages"][:3]] == ["first", "reply", "second"]
    assert len(result["messages"]) == 4


@pytest.mark.anyio
async def test_undeclared_branch_key_is_configuration_error() -> None:
    graph = WorkflowGraph(chat=FakeChatBackend(), selector=lambda _state: "homework")

    with pytest.raises(ConfigurationError, match="homework"):
        await graph.run(_state("hello"))


def test_branch_table_must_cover_every_intent() -> None:
    branches = {key: node for key, node in INTENT_BRANCHES.items() if key != Intent.ANALOGY.value}
    with pytest.raises(ConfigurationError, match="analogy"):
        WorkflowGraph(chat=FakeChatBackend(), branches=branches)


def test_branch_table_targets_known_nodes() -> None:
    branches = {**INTENT_BRANCHES, Intent.GENERAL.value: "summarize"}
    with pytest.raises(ConfigurationError, match="summarize"):
        WorkflowGraph(chat=FakeChatBackend(), branches=branches)


def test_unclassified_state_routes_as_general() -> None:
    assert route_by_intent({}) == Intent.GENERAL.value
    assert INTENT_BRANCHES[route_by_intent({})] == RESPOND


@pytest.mark.anyio
async def test_concurrent_runs_do_not_share_state() -> None:
    adapter, _ = await _connected_adapter()
    graph = WorkflowGraph(chat=FakeChatBackend(), adapter=adapter)
    results: dict[str, dict] = {}

    async def run(text: str) -> None:
        results[text] = await graph.run(_state(text))

    texts = ["What does the textbook say?", "A bible analogy for wisdom", "hi there"]
    async with anyio.create_task_group() as tg:
        for text in texts:
            tg.start_soon(run, text)

    assert results[texts[0]]["intent"] is Intent.RESEARCH
    assert results[texts[1]]["analogy"].topic == "wisdom"
    assert results[texts[2]]["tool_answer"] is None
    for text in texts:
        assert results[text]["messages"][0]["content"] == text
        assert len(results[text]["messages"]) == 2


def test_run_sync_drives_the_graph() -> None:
    graph = WorkflowGraph(chat=FakeChatBackend(reply="done"))

    result = graph.run_sync(_state("hello"))

    assert result["messages"][-1] == {"role": "assistant", "content": "done"}
