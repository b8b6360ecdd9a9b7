"""Fake tool transports for testing without a real knowledge tool process."""

from teachmate.tools.fakes.notebooks import FakeNotebookLibrary
from teachmate.tools.fakes.transport import InMemoryToolTransport, ToolHandler

__all__ = [
    "FakeNotebookLibrary",
    "InMemoryToolTransport",
    "ToolHandler",
]
