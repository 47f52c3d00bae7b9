from __future__ import annotations

from promptbot.adapters.base import Transport
from promptbot.config import Settings
from promptbot.domain import (
    ConfirmationResult,
    ConversationSession,
    DialogState,
    IncomingMessage,
)
from promptbot.logging_setup import get_logger
from promptbot.prompts import build_reset_prompt


class DialogStateError(RuntimeError):
    """A handler operation was invoked in a state that does not accept it."""

    def __init__(self, operation: str, expected: DialogState, actual: DialogState) -> None:
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(f"{operation} requires state {expected.value}, session is in {actual.value}")


class ConversationHandler:
    """Counter echo dialog with a confirmed reset.

    The handler keeps no per-conversation state. Every operation takes the
    session, sends its output through the transport and returns the updated
    session; the caller is responsible for persisting it.
    """

    def __init__(self, transport: Transport, settings: Settings) -> None:
        self.transport = transport
        self.settings = settings
        self._logger = get_logger(self.__class__.__name__)

    def on_start(self, session: ConversationSession) -> ConversationSession:
        return session.model_copy(
            update={"count": 1, "state": DialogState.AWAITING_INPUT, "pending_prompt": None}
        )

    def on_message(self, session: ConversationSession, message: IncomingMessage) -> ConversationSession:
        self._require(session, DialogState.AWAITING_INPUT, "on_message")
        text = message.text or ""

        if text.lower() == self.settings.RESET_COMMAND.lower():
            prompt = build_reset_prompt(self.settings)
            self.transport.ask_confirmation(session.conversation_id, prompt)
            return session.model_copy(
                update={"state": DialogState.AWAITING_RESET_CONFIRMATION, "pending_prompt": prompt}
            )

        self.transport.send_text(
            session.conversation_id,
            f"{session.count}. You sent {text} which was {len(text)} characters",
        )
        return session.model_copy(update={"count": session.count + 1})

    def on_confirmation_result(
        self, session: ConversationSession, result: ConfirmationResult
    ) -> ConversationSession:
        self._require(session, DialogState.AWAITING_RESET_CONFIRMATION, "on_confirmation_result")

        count = session.count
        if result.confirmed:
            count = 1
            self._logger.info(
                "Counter reset from %d", session.count, extra={"conversation_id": session.conversation_id}
            )
            self.transport.send_text(session.conversation_id, self.settings.RESET_DONE_TEXT)
        else:
            self.transport.send_text(session.conversation_id, self.settings.RESET_DECLINED_TEXT)

        return session.model_copy(
            update={"count": count, "state": DialogState.AWAITING_INPUT, "pending_prompt": None}
        )

    # Internals -----------------------------------------------------------------
    @staticmethod
    def _require(session: ConversationSession, expected: DialogState, operation: str) -> None:
        if session.state != expected:
            raise DialogStateError(operation, expected, session.state)
