"""Conversation workflows.

- langgraph/graph.py: WorkflowGraph (classify, branch, respond)
- langgraph/state.py: ConversationState and its field reducers
- langgraph/nodes.py: node factories bound to their collaborators
"""

from teachmate.workflows.langgraph import ConversationState, WorkflowGraph, new_conversation

__all__ = ["ConversationState", "WorkflowGraph", "new_conversation"]
