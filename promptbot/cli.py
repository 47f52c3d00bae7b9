from __future__ import annotations

import json
import uuid

import typer

from promptbot.adapters.console import ConsoleTransport
from promptbot.adapters.recording import RecordingTransport
from promptbot.config import Settings, load_settings
from promptbot.domain import Activity, ActivityType, ConfirmStyle
from promptbot.logging_setup import setup_logging
from promptbot.runtime import DialogRuntime

app = typer.Typer(help="PromptBot - counter echo bot with a confirmed reset")

_EXIT_WORDS = {"exit", "quit"}


def _load(settings_overrides: dict | None = None) -> Settings:
    try:
        settings = load_settings()
        if settings_overrides:
            settings = Settings(**{**settings.model_dump(), **settings_overrides})
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return settings


def _style_override(style: ConfirmStyle | None) -> dict | None:
    return {"CONFIRM_STYLE": style} if style else None


@app.callback()
def main(json_logs: bool = typer.Option(False, "--json-logs", help="Enable JSON logs")):
    settings = _load()
    setup_logging(json_logs=json_logs or settings.LOG_JSON, level=settings.LOG_LEVEL)


@app.command()
def chat(
    conversation_id: str | None = typer.Option(None, "--conversation-id"),
    style: ConfirmStyle | None = typer.Option(None, "--style", case_sensitive=False),
):
    """Talk to the bot in the terminal. Type 'exit' to leave."""
    settings = _load(_style_override(style))
    runtime = DialogRuntime(settings, transport=ConsoleTransport())
    cid = conversation_id or f"console-{uuid.uuid4().hex[:8]}"

    runtime.process(Activity(type=ActivityType.CONVERSATION_UPDATE, conversation_id=cid))
    while True:
        try:
            text = typer.prompt("you", default="", show_default=False, prompt_suffix="> ")
        except typer.Abort:
            break
        if text.strip().lower() in _EXIT_WORDS:
            break
        runtime.process(Activity(conversation_id=cid, text=text))
    runtime.process(Activity(type=ActivityType.END_OF_CONVERSATION, conversation_id=cid))


@app.command()
def say(
    messages: list[str] = typer.Option(..., "--message", "-m", help="Message to send; repeat for more turns"),
    conversation_id: str = typer.Option("cli", "--conversation-id"),
    style: ConfirmStyle | None = typer.Option(None, "--style", case_sensitive=False),
):
    """Send messages through one conversation and print the bot's output as JSON."""
    settings = _load(_style_override(style))
    transport = RecordingTransport()
    runtime = DialogRuntime(settings, transport=transport)

    session = None
    for text in messages:
        session = runtime.process(Activity(conversation_id=conversation_id, text=text))

    payload = {
        "activities": [a.model_dump(mode="json", exclude={"sent_at"}) for a in transport.drain()],
        "session": session.model_dump(mode="json", include={"conversation_id", "count", "state"})
        if session
        else None,
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    sweep: bool = typer.Option(False, "--sweep", help="End idle conversations in the background"),
):
    """Run the HTTP endpoint (POST /api/messages)."""
    import uvicorn

    from promptbot.scheduler import start_session_sweeper
    from promptbot.web_server import create_app

    settings = _load()
    runtime = DialogRuntime(settings)
    web_app = create_app(settings, runtime)

    scheduler = start_session_sweeper(runtime, settings) if sweep else None
    try:
        uvicorn.run(
            web_app,
            host=host or settings.WEB_HOST,
            port=port or settings.WEB_PORT,
            access_log=False,
            log_level="warning",
        )
    finally:
        if scheduler is not None:
            scheduler.shutdown()
