from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class DialogState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    AWAITING_RESET_CONFIRMATION = "awaiting_reset_confirmation"


class ConfirmStyle(str, Enum):
    PATTERN = "pattern"
    UNLISTED = "unlisted"
    SIMPLE = "simple"
    CHOICE = "choice"


class ConfirmationPrompt(BaseModel):
    """A yes/no question waiting for the user's answer."""

    text: str
    retry_text: str
    options: list[str] = Field(default_factory=list)
    yes_synonyms: list[str] = Field(default_factory=list)
    no_synonyms: list[str] = Field(default_factory=list)
    attempts_left: int = Field(default=1, ge=0)
    retrying: bool = False

    @property
    def display_text(self) -> str:
        return self.retry_text if self.retrying else self.text


class ConversationSession(BaseModel):
    """Per-conversation dialog state, persisted by the runtime between turns."""

    conversation_id: str
    count: int = Field(default=1, ge=1)
    state: DialogState = DialogState.AWAITING_INPUT
    pending_prompt: ConfirmationPrompt | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class IncomingMessage(BaseModel):
    text: str | None = None


class ConfirmationResult(BaseModel):
    confirmed: bool


class ActivityType(str, Enum):
    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversation_update"
    END_OF_CONVERSATION = "end_of_conversation"


class Activity(BaseModel):
    """An inbound event delivered by a transport."""

    type: ActivityType = ActivityType.MESSAGE
    conversation_id: str = Field(min_length=1)
    text: str | None = None


class OutboundKind(str, Enum):
    REPLY = "reply"
    CONFIRMATION = "confirmation"


class OutboundActivity(BaseModel):
    """Something the bot sent back to the user."""

    conversation_id: str
    kind: OutboundKind
    text: str
    options: list[str] = Field(default_factory=list)
    sent_at: datetime = Field(default_factory=_utcnow)
