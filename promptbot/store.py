from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from promptbot.domain import ConversationSession


class SessionStore(ABC):
    """Keeps one session per conversation between turns."""

    @abstractmethod
    def get(self, conversation_id: str) -> ConversationSession | None:  # pragma: no cover - interface
        ...

    @abstractmethod
    def save(self, session: ConversationSession) -> None:  # pragma: no cover - interface
        ...

    @abstractmethod
    def delete(self, conversation_id: str) -> bool:  # pragma: no cover - interface
        ...

    @abstractmethod
    def idle_since(self, cutoff: datetime) -> Iterable[str]:  # pragma: no cover - interface
        ...


class MemorySessionStore(SessionStore):
    """Process-local store. Sessions are copied in and out so callers never share instances."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, ConversationSession] = {}

    def get(self, conversation_id: str) -> ConversationSession | None:
        with self._lock:
            session = self._sessions.get(conversation_id)
            return session.model_copy(deep=True) if session else None

    def save(self, session: ConversationSession) -> None:
        with self._lock:
            self._sessions[session.conversation_id] = session.model_copy(deep=True)

    def delete(self, conversation_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(conversation_id, None) is not None

    def idle_since(self, cutoff: datetime) -> list[str]:
        with self._lock:
            return [cid for cid, s in self._sessions.items() if s.updated_at < cutoff]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
