"""Teacher assistant chat from the terminal."""

from __future__ import annotations

import anyio
import click
from rich.markup import escape

from teachmate.agents.classifier import message_text
from teachmate.backends import get_chat_backend
from teachmate.cli.session import optional_adapter
from teachmate.cli.ui import console, render_answer
from teachmate.workflows.langgraph.graph import WorkflowGraph
from teachmate.workflows.langgraph.state import new_conversation


def _parse_context(pairs: tuple[str, ...]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--context")
        context[key.strip()] = value.strip()
    return context


@click.command("chat")
@click.argument("message")
@click.option("--teacher-id", default="local-teacher", show_default=True)
@click.option("--context", "context_pairs", multiple=True, help="Class context as KEY=VALUE")
@click.option("--show-sources", is_flag=True, help="Print the research answer and citations")
def chat(message: str, teacher_id: str, context_pairs: tuple[str, ...], show_sources: bool) -> None:
    """Send one message through the teacher assistant workflow."""
    context = _parse_context(context_pairs)
    try:
        chat_backend = get_chat_backend()
    except RuntimeError as exc:
        raise click.ClickException(str(exc)) from exc

    async def _run() -> None:
        async with optional_adapter() as adapter:
            workflow = WorkflowGraph(chat=chat_backend, adapter=adapter)
            result = await workflow.run(
                new_conversation(
                    [{"role": "user", "content": message}],
                    subject_id=teacher_id,
                    context=context,
                )
            )

        console.print(f"[dim]intent: {result['intent'].value}[/dim]")
        console.print(message_text(result["messages"][-1]), markup=False)
        if show_sources and result["tool_answer"] is not None:
            render_answer(result["tool_answer"])
        analogy = result["analogy"]
        if analogy is not None:
            console.print(f"[cyan]{escape(analogy.verse)}[/cyan] {escape(analogy.hook)}")

    anyio.run(_run)


def register(cli: click.Group) -> None:
    cli.add_command(chat)
