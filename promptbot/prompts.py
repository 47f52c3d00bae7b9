"""Confirmation prompts for the reset question.

Four styles are supported:

- ``pattern``: shows yes/no and accepts the configured synonym lists
- ``unlisted``: same synonyms, but the choices are not shown
- ``simple``: shows yes/no and accepts only those two words
- ``choice``: shows Yes/No/Thankyou, where only Yes confirms

Answers are matched by plain word lookup. Anything smarter belongs to a real
language-understanding layer, not to this bot.
"""

from __future__ import annotations

from promptbot.config import Settings
from promptbot.domain import ConfirmationPrompt, ConfirmStyle

YES_NO_OPTIONS = ["yes", "no"]
CHOICE_OPTIONS = ["Yes", "No", "Thankyou"]


def build_reset_prompt(settings: Settings) -> ConfirmationPrompt:
    style = settings.CONFIRM_STYLE
    if style == ConfirmStyle.PATTERN:
        options, yes, no = YES_NO_OPTIONS, settings.YES_SYNONYMS, settings.NO_SYNONYMS
    elif style == ConfirmStyle.UNLISTED:
        options, yes, no = [], settings.YES_SYNONYMS, settings.NO_SYNONYMS
    elif style == ConfirmStyle.SIMPLE:
        options, yes, no = YES_NO_OPTIONS, ("yes",), ("no",)
    elif style == ConfirmStyle.CHOICE:
        options, yes, no = CHOICE_OPTIONS, ("yes",), ("no", "thankyou")
    else:  # pragma: no cover - enum is exhaustive
        raise ValueError(f"Unknown confirm style: {style}")

    return ConfirmationPrompt(
        text=settings.RESET_PROMPT_TEXT,
        retry_text=settings.PROMPT_RETRY_TEXT,
        options=list(options),
        yes_synonyms=list(yes),
        no_synonyms=list(no),
        attempts_left=settings.PROMPT_ATTEMPTS,
    )


def recognize_answer(prompt: ConfirmationPrompt, text: str | None) -> bool | None:
    """Map a typed answer to True/False, or None when it matches neither list."""
    word = (text or "").strip().lower()
    if not word:
        return None
    if word in {w.lower() for w in prompt.yes_synonyms}:
        return True
    if word in {w.lower() for w in prompt.no_synonyms}:
        return False
    return None


def retry_prompt(prompt: ConfirmationPrompt) -> ConfirmationPrompt | None:
    """Use up one attempt. Returns None once no attempts remain."""
    remaining = prompt.attempts_left - 1
    if remaining <= 0:
        return None
    return prompt.model_copy(update={"attempts_left": remaining, "retrying": True})


def render_prompt(prompt: ConfirmationPrompt) -> str:
    if not prompt.options:
        return prompt.display_text
    return f"{prompt.display_text} ({'/'.join(prompt.options)})"
