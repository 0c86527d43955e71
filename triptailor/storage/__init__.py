"""Conversation persistence interface and in-memory implementation."""

from triptailor.storage.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
    trim_history,
)

__all__ = ["ConversationStore", "InMemoryConversationStore", "trim_history"]
