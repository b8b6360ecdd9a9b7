"""Deterministic stand-in for the notebook knowledge tool."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from teachmate.tools.base import format_tool_error, format_tool_success
from teachmate.tools.fakes.transport import InMemoryToolTransport

__all__ = ["FakeNotebookLibrary"]


@dataclass
class FakeNotebookLibrary:
    """Fake knowledge tool keeping notebooks in memory.

    Answers cite the selected (or requested) notebook so the confidence
    scoring path is exercised end to end without a real tool process.
    """

    notebooks: List[Dict[str, Any]] = field(default_factory=list)
    selected_id: str | None = None

    def ask_question(self, args: Dict[str, Any]) -> Dict[str, Any]:
        question = str(args.get("query") or "").strip()
        if not question:
            return format_tool_error("query is required")
        notebook_id = args.get("notebook_id") or self.selected_id
        notebook = self._find(notebook_id) if notebook_id else None
        if notebook_id and notebook is None:
            return format_tool_error(f"Notebook not found: {notebook_id}")
        if notebook is None:
            return format_tool_success({"answer": f"No notebook selected to answer: {question}"})
        return format_tool_success(
            {
                "answer": f"{notebook['name']} covers: {question}",
                "citations": [
                    {"source": notebook["name"], "quote": notebook.get("description") or question}
                ],
            }
        )

    def add_notebook(self, args: Dict[str, Any]) -> Dict[str, Any]:
        if not args.get("url") or not args.get("name"):
            return format_tool_error("url and name are required")
        notebook = {
            "id": f"fake-notebook-{len(self.notebooks) + 1}",
            "url": args["url"],
            "name": args["name"],
            "description": args.get("description"),
            "topics": list(args.get("topics") or []),
        }
        self.notebooks.append(notebook)
        return format_tool_success({"notebook": notebook})

    def list_notebooks(self, _args: Dict[str, Any]) -> Dict[str, Any]:
        return format_tool_success({"notebooks": [dict(n) for n in self.notebooks]})

    def select_notebook(self, args: Dict[str, Any]) -> Dict[str, Any]:
        notebook_id = args.get("notebook_id")
        if not notebook_id or self._find(notebook_id) is None:
            return format_tool_error(f"Notebook not found: {notebook_id}")
        self.selected_id = notebook_id
        return format_tool_success()

    def transport(self) -> InMemoryToolTransport:
        return InMemoryToolTransport(
            handlers={
                "ask_question": self.ask_question,
                "add_notebook": self.add_notebook,
                "list_notebooks": self.list_notebooks,
                "select_notebook": self.select_notebook,
            }
        )

    def _find(self, notebook_id: str) -> Dict[str, Any] | None:
        return next((n for n in self.notebooks if n["id"] == notebook_id), None)
