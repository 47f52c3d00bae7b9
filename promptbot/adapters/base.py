from __future__ import annotations

from abc import ABC, abstractmethod

from promptbot.domain import ConfirmationPrompt


class Transport(ABC):
    """Outbound side of a channel.

    Both calls are fire-and-forget: the answer to a confirmation prompt arrives
    later as an ordinary inbound message for the same conversation.
    """

    @abstractmethod
    def send_text(self, conversation_id: str, text: str) -> None:  # pragma: no cover - interface
        ...

    @abstractmethod
    def ask_confirmation(
        self, conversation_id: str, prompt: ConfirmationPrompt
    ) -> None:  # pragma: no cover - interface
        ...
