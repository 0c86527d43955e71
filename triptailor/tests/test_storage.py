"""
Tests for the conversation store and history trimming.
"""

from triptailor.storage.conversation_store import InMemoryConversationStore, trim_history


class TestInMemoryConversationStore:
    def test_get_set_delete(self):
        store = InMemoryConversationStore()
        assert store.get("a") is None

        store.set("a", [{"role": "user", "content": "hi"}])
        assert store.get("a") == [{"role": "user", "content": "hi"}]
        assert len(store) == 1

        assert store.delete("a") is True
        assert store.delete("a") is False
        assert len(store) == 0


class TestTrimHistory:
    def test_keeps_most_recent(self):
        messages = [{"content": str(i)} for i in range(50)]
        trimmed = trim_history(messages)
        assert len(trimmed) == 40
        assert trimmed[0]["content"] == "10"
        assert trimmed[-1]["content"] == "49"

    def test_short_history_unchanged(self):
        messages = [{"content": "only"}]
        assert trim_history(messages) == messages

    def test_zero_cap(self):
        assert trim_history([{"content": "x"}], cap=0) == []
