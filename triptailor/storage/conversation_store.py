"""
Conversation store abstraction.

The agent never keeps state between turns; callers persist message history
and the last completed agent state through a store keyed by conversation id.
The in-memory implementation backs development and tests; production
deployments inject a database-backed store with the same interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")

DEFAULT_HISTORY_CAP = 40


class ConversationStore(ABC, Generic[T]):
    """Key-value store keyed by conversation id."""

    @abstractmethod
    def get(self, conversation_id: str) -> Optional[T]:
        ...

    @abstractmethod
    def set(self, conversation_id: str, value: T) -> None:
        ...

    @abstractmethod
    def delete(self, conversation_id: str) -> bool:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryConversationStore(ConversationStore[T]):
    """Process-local dict store."""

    def __init__(self):
        self._data: Dict[str, T] = {}

    def get(self, conversation_id: str) -> Optional[T]:
        return self._data.get(conversation_id)

    def set(self, conversation_id: str, value: T) -> None:
        self._data[conversation_id] = value

    def delete(self, conversation_id: str) -> bool:
        return self._data.pop(conversation_id, None) is not None

    def __len__(self) -> int:
        return len(self._data)


def trim_history(
    messages: List[Dict[str, Any]],
    cap: int = DEFAULT_HISTORY_CAP,
) -> List[Dict[str, Any]]:
    """Keep the most recent cap entries (40 = 20 exchanges)."""
    if cap <= 0:
        return []
    return list(messages[-cap:])
