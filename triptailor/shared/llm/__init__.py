"""LLM client utilities."""

from triptailor.shared.llm.client import (
    TextCompletionClient,
    build_messages,
    complete_with_deadline,
    create_text_completion_client,
)

__all__ = [
    "TextCompletionClient",
    "build_messages",
    "complete_with_deadline",
    "create_text_completion_client",
]
