from __future__ import annotations

import threading
import weakref
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from promptbot.adapters.base import Transport
from promptbot.config import Settings
from promptbot.domain import (
    Activity,
    ActivityType,
    ConfirmationResult,
    ConversationSession,
    DialogState,
    IncomingMessage,
)
from promptbot.handler import ConversationHandler
from promptbot.logging_setup import get_logger
from promptbot.prompts import build_reset_prompt, recognize_answer, retry_prompt
from promptbot.store import MemorySessionStore, SessionStore


class DialogRuntime:
    """Hosts conversations: loads the session, routes the turn, saves the result.

    Turns of one conversation run one at a time; different conversations only
    share the store.
    """

    def __init__(
        self,
        settings: Settings,
        store: SessionStore | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or MemorySessionStore()
        self.transport = transport
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._locks_guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._logger = get_logger(self.__class__.__name__)

    def process(self, activity: Activity, transport: Transport | None = None) -> ConversationSession | None:
        """Run one inbound activity. Returns the saved session, or None once the conversation ended."""
        out = transport or self.transport
        if out is None:
            raise ValueError("No transport given and no default transport configured")

        cid = activity.conversation_id
        with self._lock_for(cid):
            if activity.type == ActivityType.END_OF_CONVERSATION:
                self._end(cid)
                return None

            handler = ConversationHandler(out, self.settings)
            session = self.store.get(cid)
            if session is None:
                now = self._clock()
                session = handler.on_start(
                    ConversationSession(conversation_id=cid, created_at=now, updated_at=now)
                )
                self._logger.info("Conversation started", extra={"conversation_id": cid})

            if activity.type == ActivityType.MESSAGE:
                session = self._dispatch(handler, session, activity.text)

            session = session.model_copy(update={"updated_at": self._clock()})
            self.store.save(session)
            return session

    def get_session(self, conversation_id: str) -> ConversationSession | None:
        return self.store.get(conversation_id)

    def end_conversation(self, conversation_id: str) -> bool:
        with self._lock_for(conversation_id):
            return self._end(conversation_id)

    def sweep_idle(self, ttl_s: int, now: datetime | None = None) -> int:
        """End every conversation whose last turn is older than ``ttl_s`` seconds."""
        cutoff = (now or self._clock()) - timedelta(seconds=ttl_s)
        ended = 0
        for cid in list(self.store.idle_since(cutoff)):
            if self._end_if_idle(cid, cutoff):
                ended += 1
        return ended

    # Internals -----------------------------------------------------------------
    def _dispatch(
        self, handler: ConversationHandler, session: ConversationSession, text: str | None
    ) -> ConversationSession:
        if session.state == DialogState.AWAITING_INPUT:
            return handler.on_message(session, IncomingMessage(text=text))
        return self._resume_confirmation(handler, session, text)

    def _resume_confirmation(
        self, handler: ConversationHandler, session: ConversationSession, text: str | None
    ) -> ConversationSession:
        prompt = session.pending_prompt or build_reset_prompt(self.settings)
        answer = recognize_answer(prompt, text)

        if answer is None:
            retry = retry_prompt(prompt)
            if retry is not None:
                self._logger.info(
                    "Unrecognised answer %r, %d attempt(s) left",
                    text,
                    retry.attempts_left,
                    extra={"conversation_id": session.conversation_id},
                )
                handler.transport.ask_confirmation(session.conversation_id, retry)
                return session.model_copy(update={"pending_prompt": retry})
            self._logger.warning(
                "Confirmation attempts exhausted, treating as declined",
                extra={"conversation_id": session.conversation_id},
            )
            answer = False

        return handler.on_confirmation_result(session, ConfirmationResult(confirmed=answer))

    def _end(self, conversation_id: str) -> bool:
        removed = self.store.delete(conversation_id)
        if removed:
            self._logger.info("Conversation ended", extra={"conversation_id": conversation_id})
        return removed

    def _end_if_idle(self, conversation_id: str, cutoff: datetime) -> bool:
        # The scan ran without the lock; a turn may have landed since.
        with self._lock_for(conversation_id):
            session = self.store.get(conversation_id)
            if session is None or session.updated_at >= cutoff:
                return False
            return self._end(conversation_id)

    def _lock_for(self, conversation_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(conversation_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[conversation_id] = lock
            return lock
