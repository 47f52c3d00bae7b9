from __future__ import annotations

import typer

from promptbot.adapters.base import Transport
from promptbot.domain import ConfirmationPrompt
from promptbot.prompts import render_prompt


class ConsoleTransport(Transport):
    """Prints bot output to the terminal for the interactive ``chat`` command."""

    def __init__(self, prefix: str = "bot> ") -> None:
        self._prefix = prefix

    def send_text(self, conversation_id: str, text: str) -> None:
        typer.echo(f"{self._prefix}{text}")

    def ask_confirmation(self, conversation_id: str, prompt: ConfirmationPrompt) -> None:
        typer.echo(f"{self._prefix}{render_prompt(prompt)}")
