from __future__ import annotations

from datetime import UTC, datetime, timedelta

from promptbot.domain import ConversationSession
from promptbot.store import MemorySessionStore


def test_sessions_are_copied_in_and_out():
    store = MemorySessionStore()
    session = ConversationSession(conversation_id="c1")
    store.save(session)

    session.count = 5
    loaded = store.get("c1")
    assert loaded.count == 1

    loaded.count = 9
    assert store.get("c1").count == 1


def test_delete_and_len():
    store = MemorySessionStore()
    store.save(ConversationSession(conversation_id="a"))
    store.save(ConversationSession(conversation_id="b"))
    assert len(store) == 2

    assert store.delete("a") is True
    assert store.delete("a") is False
    assert len(store) == 1
    assert store.get("a") is None


def test_idle_since_uses_updated_at():
    now = datetime(2024, 1, 1, tzinfo=UTC)
    store = MemorySessionStore()
    store.save(ConversationSession(conversation_id="old", updated_at=now - timedelta(hours=1)))
    store.save(ConversationSession(conversation_id="new", updated_at=now))
    assert store.idle_since(now - timedelta(minutes=5)) == ["old"]
