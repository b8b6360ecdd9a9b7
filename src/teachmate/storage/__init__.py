"""Notebook persistence and access control."""

from teachmate.storage.registry import InMemoryNotebookRegistry

__all__ = ["InMemoryNotebookRegistry"]
