"""API route modules."""

from teachmate.api.routes import chat, health, playbook, research

__all__ = ["chat", "health", "playbook", "research"]
