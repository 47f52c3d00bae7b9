from __future__ import annotations

import threading

from promptbot.adapters.base import Transport
from promptbot.domain import ConfirmationPrompt, OutboundActivity, OutboundKind


class RecordingTransport(Transport):
    """Buffers outbound activities in memory until the host drains them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._activities: list[OutboundActivity] = []

    def send_text(self, conversation_id: str, text: str) -> None:
        self._append(OutboundActivity(conversation_id=conversation_id, kind=OutboundKind.REPLY, text=text))

    def ask_confirmation(self, conversation_id: str, prompt: ConfirmationPrompt) -> None:
        self._append(
            OutboundActivity(
                conversation_id=conversation_id,
                kind=OutboundKind.CONFIRMATION,
                text=prompt.display_text,
                options=list(prompt.options),
            )
        )

    @property
    def activities(self) -> list[OutboundActivity]:
        with self._lock:
            return list(self._activities)

    def texts(self) -> list[str]:
        return [a.text for a in self.activities]

    def drain(self, conversation_id: str | None = None) -> list[OutboundActivity]:
        """Remove and return buffered activities, optionally for one conversation."""
        with self._lock:
            if conversation_id is None:
                drained, self._activities = self._activities, []
                return drained
            drained = [a for a in self._activities if a.conversation_id == conversation_id]
            self._activities = [a for a in self._activities if a.conversation_id != conversation_id]
            return drained

    def _append(self, activity: OutboundActivity) -> None:
        with self._lock:
            self._activities.append(activity)
