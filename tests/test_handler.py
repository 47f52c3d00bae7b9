from __future__ import annotations

import pytest

from promptbot.adapters.recording import RecordingTransport
from promptbot.config import Settings
from promptbot.domain import (
    ConfirmationResult,
    ConversationSession,
    DialogState,
    IncomingMessage,
    OutboundKind,
)
from promptbot.handler import ConversationHandler, DialogStateError


def _mk_handler(**overrides) -> tuple[ConversationHandler, RecordingTransport]:
    transport = RecordingTransport()
    return ConversationHandler(transport, Settings(**overrides)), transport


def _started(handler: ConversationHandler, count: int = 1) -> ConversationSession:
    session = handler.on_start(ConversationSession(conversation_id="c1"))
    return session.model_copy(update={"count": count})


def test_on_start_initializes_counter_and_state():
    handler, _ = _mk_handler()
    stale = ConversationSession(
        conversation_id="c1", count=9, state=DialogState.AWAITING_RESET_CONFIRMATION
    )
    session = handler.on_start(stale)
    assert session.count == 1
    assert session.state == DialogState.AWAITING_INPUT
    assert session.pending_prompt is None


@pytest.mark.parametrize("text", ["hello", "a", "two words", "ünïcødé", "resets", " reset"])
def test_echo_reply_and_increment(text):
    handler, transport = _mk_handler()
    session = _started(handler, count=7)

    updated = handler.on_message(session, IncomingMessage(text=text))

    assert transport.texts() == [f"7. You sent {text} which was {len(text)} characters"]
    assert updated.count == 8
    assert updated.state == DialogState.AWAITING_INPUT


def test_missing_text_is_treated_as_empty():
    handler, transport = _mk_handler()
    session = _started(handler)

    updated = handler.on_message(session, IncomingMessage(text=None))

    assert transport.texts() == ["1. You sent  which was 0 characters"]
    assert updated.count == 2


@pytest.mark.parametrize("text", ["reset", "RESET", "Reset", "rEsEt"])
def test_reset_any_case_asks_confirmation(text):
    handler, transport = _mk_handler()
    session = _started(handler, count=42)

    updated = handler.on_message(session, IncomingMessage(text=text))

    [activity] = transport.activities
    assert activity.kind == OutboundKind.CONFIRMATION
    assert activity.text == "Are you sure you want to reset?"
    assert updated.state == DialogState.AWAITING_RESET_CONFIRMATION
    assert updated.count == 42
    assert updated.pending_prompt is not None
    assert "yeah" in updated.pending_prompt.yes_synonyms
    assert "nope" in updated.pending_prompt.no_synonyms


def test_confirm_resets_counter():
    handler, transport = _mk_handler()
    session = handler.on_message(_started(handler, count=5), IncomingMessage(text="reset"))
    transport.drain()

    updated = handler.on_confirmation_result(session, ConfirmationResult(confirmed=True))

    assert transport.texts() == ["Reset count."]
    assert updated.count == 1
    assert updated.state == DialogState.AWAITING_INPUT
    assert updated.pending_prompt is None


def test_decline_keeps_counter():
    handler, transport = _mk_handler()
    session = handler.on_message(_started(handler, count=5), IncomingMessage(text="reset"))
    transport.drain()

    updated = handler.on_confirmation_result(session, ConfirmationResult(confirmed=False))

    assert transport.texts() == ["Did not reset count."]
    assert updated.count == 5
    assert updated.state == DialogState.AWAITING_INPUT


def test_two_declines_leave_counter_unchanged():
    handler, _ = _mk_handler()
    session = _started(handler, count=3)
    for _ in range(2):
        session = handler.on_message(session, IncomingMessage(text="reset"))
        session = handler.on_confirmation_result(session, ConfirmationResult(confirmed=False))
    assert session.count == 3


def test_handler_does_not_mutate_input_session():
    handler, _ = _mk_handler()
    session = _started(handler, count=2)
    handler.on_message(session, IncomingMessage(text="hi"))
    assert session.count == 2


def test_operations_reject_wrong_state():
    handler, _ = _mk_handler()
    session = _started(handler)
    with pytest.raises(DialogStateError):
        handler.on_confirmation_result(session, ConfirmationResult(confirmed=True))

    parked = handler.on_message(session, IncomingMessage(text="reset"))
    with pytest.raises(DialogStateError):
        handler.on_message(parked, IncomingMessage(text="hello"))


def test_custom_reset_command():
    handler, transport = _mk_handler(RESET_COMMAND="Restart")
    session = handler.on_message(_started(handler), IncomingMessage(text="restart"))
    assert session.state == DialogState.AWAITING_RESET_CONFIRMATION
    assert transport.activities[0].kind == OutboundKind.CONFIRMATION
